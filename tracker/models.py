from django.db import models
from django.db.models import Q


class Level(models.TextChoices):
    B1_PLUS = "B1_PLUS", "B1+"
    B2 = "B2", "B2"


# Target study hours per level; a new level needs an entry here as well.
GOAL_HOURS = {
    Level.B1_PLUS: 200.0,
    Level.B2: 320.0,
}


class StudySession(models.Model):
    id = models.CharField(max_length=36, primary_key=True, editable=False)     # uuid4 text
    level = models.CharField(max_length=16, choices=Level.choices, db_index=True)
    started_at = models.DateTimeField()                                         # Set at start
    ended_at = models.DateTimeField(null=True, blank=True)                      # Set once at stop
    duration_seconds = models.PositiveIntegerField(null=True, blank=True)       # ended_at - started_at

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(ended_at__isnull=True, duration_seconds__isnull=True)
                    | Q(ended_at__isnull=False, duration_seconds__isnull=False)
                ),
                name="ck_session_stop_fields_together",
            ),
        ]
        indexes = [
            models.Index(fields=["level", "ended_at"], name="idx_level_ended"),
        ]

    def __str__(self):
        return f"{self.level} session {self.id}"

    @property
    def is_open(self) -> bool:
        return self.ended_at is None
