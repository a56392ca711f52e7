# tracker/store.py
from __future__ import annotations

import datetime as dt
from functools import wraps
from typing import Dict, Optional

from django.db import DatabaseError
from django.db.models import Sum

from .errors import StoreError
from .models import StudySession


def _wrap_db_errors(fn):
    """Re-raise any database failure as StoreError (no retry)."""
    @wraps(fn)
    def inner(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except DatabaseError as e:
            raise StoreError(f"{fn.__name__} failed: {e}") from e
    return inner


class SessionStore:
    """Django ORM persistence for StudySession rows."""

    @_wrap_db_errors
    def insert(self, session: StudySession) -> StudySession:
        session.save(force_insert=True)
        return session

    @_wrap_db_errors
    def find_by_id(self, session_id: str) -> Optional[StudySession]:
        return StudySession.objects.filter(id=session_id).first()

    @_wrap_db_errors
    def update_on_stop(self, session_id: str, ended_at: dt.datetime, duration_seconds: int) -> int:
        """
        Close an open session in one conditional UPDATE.
        Returns the affected row count: 0 when the id is unknown or the
        session was already closed by someone else.
        """
        return StudySession.objects.filter(id=session_id, ended_at__isnull=True).update(
            ended_at=ended_at,
            duration_seconds=duration_seconds,
        )

    @_wrap_db_errors
    def delete(self, session_id: str) -> int:
        deleted, _ = StudySession.objects.filter(id=session_id).delete()
        return deleted

    @_wrap_db_errors
    def sum_duration_by_level(self) -> Dict[str, int]:
        rows = (
            StudySession.objects.filter(duration_seconds__isnull=False)
            .values("level")
            .annotate(total_s=Sum("duration_seconds"))
            .order_by()
        )
        return {row["level"]: int(row["total_s"] or 0) for row in rows}
