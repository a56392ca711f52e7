# tracker/services.py
from __future__ import annotations

import datetime as dt
import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, List

from django.utils import timezone

from .errors import AlreadyStopped, ClockRegressionError, InvalidLevel, NotFoundError
from .models import GOAL_HOURS, Level, StudySession

logger = logging.getLogger(__name__)


def _round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, ties going up."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _round_to(value: float, places: int) -> float:
    """Round a float to `places` decimals, ties going up."""
    step = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))


def seconds_to_minutes(seconds: int) -> int:
    return _round_half_up(Decimal(seconds) / 60)


def seconds_to_hours(seconds: int) -> float:
    """Hours rounded to 2 decimals: round(seconds / 3600 * 100) / 100."""
    return _round_half_up(Decimal(seconds) / 36) / 100


def parse_level(raw) -> Level:
    """Normalize a caller-supplied level ('b1_plus' -> Level.B1_PLUS)."""
    if not isinstance(raw, str):
        raise InvalidLevel(raw, Level.values)
    try:
        return Level(raw.strip().upper())
    except ValueError:
        raise InvalidLevel(raw, Level.values) from None


def _new_session_id() -> str:
    return str(uuid.uuid4())


def _ensure_aware(d: dt.datetime) -> dt.datetime:
    if timezone.is_naive(d):
        d = timezone.make_aware(d, dt.timezone.utc)
    return d.astimezone(dt.timezone.utc)


class SessionLifecycle:
    """
    start -> stop / start -> discard for study sessions.

    The store is passed in so tests can use an in-memory double; `now`
    and `new_id` default to the wall clock and uuid4.
    """

    def __init__(
        self,
        store,
        *,
        now: Callable[[], dt.datetime] = timezone.now,
        new_id: Callable[[], str] = _new_session_id,
    ):
        self.store = store
        self.now = now
        self.new_id = new_id

    def start(self, level) -> str:
        lvl = parse_level(level)
        session = StudySession(
            id=self.new_id(),
            level=lvl.value,
            started_at=_ensure_aware(self.now()),
        )
        self.store.insert(session)
        logger.info("Started %s session %s", lvl.value, session.id)
        return session.id

    def stop(self, session_id: str) -> int:
        """Close an open session and return its duration in whole minutes."""
        session = self.store.find_by_id(session_id)
        if session is None:
            raise NotFoundError()
        if session.ended_at is not None:
            raise AlreadyStopped()

        started_at = _ensure_aware(session.started_at)
        ended_at = _ensure_aware(self.now())
        if ended_at < started_at:
            raise ClockRegressionError(
                f"stop time {ended_at.isoformat()} is before start time {started_at.isoformat()}"
            )
        duration_seconds = int((ended_at - started_at).total_seconds())

        if self.store.update_on_stop(session_id, ended_at, duration_seconds) == 0:
            # Lost a race: someone else stopped or discarded it in between.
            if self.store.find_by_id(session_id) is None:
                raise NotFoundError()
            raise AlreadyStopped()

        logger.info(
            "Stopped %s session %s after %d s", session.level, session_id, duration_seconds
        )
        return seconds_to_minutes(duration_seconds)

    def discard(self, session_id: str) -> None:
        if self.store.delete(session_id) == 0:
            raise NotFoundError()
        logger.info("Discarded session %s", session_id)


class StatsAggregator:
    """Cumulative hours per level from closed sessions, plus goal constants."""

    def __init__(self, store):
        self.store = store

    def get_stats(self) -> Dict[str, float]:
        by_level = self.store.sum_duration_by_level()
        out: Dict[str, float] = {}
        total_s = 0
        for lvl in Level:
            seconds = int(by_level.get(lvl.value, 0))
            total_s += seconds
            out[f"{lvl.value.lower()}_hours"] = seconds_to_hours(seconds)
        # From summed seconds, not from the rounded per-level figures.
        out["total_hours"] = seconds_to_hours(total_s)
        for lvl in Level:
            out[f"{lvl.value.lower()}_goal_hours"] = float(GOAL_HOURS[lvl])
        return out

    def progress(self) -> List[Dict]:
        """
        Hours against the goal for each level, then a combined row
        (total hours against the summed goals).
        """
        stats = self.get_stats()
        rows = [
            _progress_row(lvl.value, lvl.label, stats[f"{lvl.value.lower()}_hours"], float(GOAL_HOURS[lvl]))
            for lvl in Level
        ]
        rows.append(_progress_row(
            "TOTAL", "Combined Total", stats["total_hours"], float(sum(GOAL_HOURS.values()))
        ))
        return rows


def _progress_row(level: str, label: str, hours: float, goal: float) -> Dict:
    return {
        "level": level,
        "label": label,
        "hours": hours,
        "goal_hours": goal,
        "percent": _round_to(min(hours / goal * 100.0, 100.0), 1),
        "remaining_hours": _round_to(max(goal - hours, 0.0), 2),
    }
