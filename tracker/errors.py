# tracker/errors.py
"""
Errors raised by the session lifecycle and the session store.
Each carries the HTTP status the API answers with; views turn any
TrackerError into {"detail": str(exc)} with that status.
"""


class TrackerError(Exception):
    status_code = 500
    default_detail = "internal error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.default_detail)


class ValidationError(TrackerError):
    status_code = 400
    default_detail = "invalid request"


class InvalidLevel(ValidationError):
    def __init__(self, level, allowed):
        super().__init__(f"level must be one of {' or '.join(allowed)} (got {level!r})")
        self.level = level


class NotFoundError(TrackerError):
    status_code = 404
    default_detail = "session not found"


class ConflictError(TrackerError):
    status_code = 400
    default_detail = "conflicting session state"


class AlreadyStopped(ConflictError):
    default_detail = "session already stopped"


class ClockRegressionError(TrackerError):
    """Server clock is earlier than the session's started_at."""
    status_code = 500
    default_detail = "server clock moved backwards; session not stopped"


class StoreError(TrackerError):
    status_code = 500
    default_detail = "session store failure"
