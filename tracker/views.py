# tracker/views.py
from __future__ import annotations

import logging
import mimetypes
import os

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.http import FileResponse, Http404
from django.utils._os import safe_join
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .errors import TrackerError
from .serializers import StartSessionSerializer
from .services import SessionLifecycle, StatsAggregator
from .store import SessionStore

logger = logging.getLogger(__name__)


def get_lifecycle() -> SessionLifecycle:
    return SessionLifecycle(SessionStore())


def get_stats_aggregator() -> StatsAggregator:
    return StatsAggregator(SessionStore())


def _error_response(request, exc: TrackerError) -> Response:
    """Translate a tracker error into {"detail": ...} with its status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.path, exc, exc_info=exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.path, exc)
    return Response({'detail': str(exc)}, status=exc.status_code)


def _first_error(errors) -> str:
    for field, messages in errors.items():
        if messages:
            return str(messages[0]) if field == 'level' else f"{field}: {messages[0]}"
    return 'invalid request'


class SessionStartView(APIView):
    """POST /api/sessions/start  {"level": "B1_PLUS" | "B2"} -> 201 {"session_id"}."""
    def post(self, request):
        serializer = StartSessionSerializer(data=request.data or {})
        if not serializer.is_valid():
            detail = _first_error(serializer.errors)
            logger.warning("POST %s rejected: %s", request.path, detail)
            return Response({'detail': detail}, status=status.HTTP_400_BAD_REQUEST)

        try:
            session_id = get_lifecycle().start(serializer.validated_data['level'])
        except TrackerError as e:
            return _error_response(request, e)
        return Response({'session_id': session_id}, status=status.HTTP_201_CREATED)


class SessionStopView(APIView):
    """POST /api/sessions/stop/{id} -> 200 {"duration_minutes"}; raw seconds stay server-side."""
    def post(self, request, session_id: str):
        try:
            minutes = get_lifecycle().stop(session_id)
        except TrackerError as e:
            return _error_response(request, e)
        return Response({'duration_minutes': minutes}, status=status.HTTP_200_OK)


class SessionDiscardView(APIView):
    """DELETE /api/sessions/{id}: drop a session the user chose not to log."""
    def delete(self, request, session_id: str):
        try:
            get_lifecycle().discard(session_id)
        except TrackerError as e:
            return _error_response(request, e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StatsView(APIView):
    """
    GET /api/stats
    Hours per level and combined, from closed sessions only,
    together with the fixed goal hours for each level.
    """
    def get(self, request):
        try:
            stats = get_stats_aggregator().get_stats()
        except TrackerError as e:
            return _error_response(request, e)
        return Response(stats, status=status.HTTP_200_OK)


def spa_fallback(request, path: str = ""):
    """Serve a file of the built frontend, or its index.html for client-side routes."""
    root = str(settings.FRONTEND_DIR)
    names = [path, 'index.html'] if path else ['index.html']
    for name in names:
        try:
            full = safe_join(root, name)
        except SuspiciousFileOperation:
            continue
        if os.path.isfile(full):
            content_type, _ = mimetypes.guess_type(full)
            return FileResponse(open(full, 'rb'), content_type=content_type or 'application/octet-stream')
    raise Http404("frontend not built")
