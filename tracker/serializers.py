# tracker/serializers.py
from rest_framework import serializers

from .errors import InvalidLevel
from .services import parse_level


class StartSessionSerializer(serializers.Serializer):
    """
    Body of POST /api/sessions/start.
    Notes:
      - level is matched case-insensitively ("b1_plus" -> "B1_PLUS").
      - validated_data["level"] is the normalized Level value.
    """
    level = serializers.CharField(max_length=16, trim_whitespace=True)

    def validate_level(self, v: str):
        try:
            return parse_level(v).value
        except InvalidLevel as e:
            raise serializers.ValidationError(str(e))
