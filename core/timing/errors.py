"""Exceptions raised by the session and lap state machines and their callers."""

from __future__ import annotations


class TrackingError(Exception):
    """Base class for every error raised by the tracker."""


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class SessionError(TrackingError):
    """Illegal operation on a :class:`core.timing.session.Session`."""


class CannotStartTwiceError(SessionError):
    def __init__(self) -> None:
        super().__init__("session has already been started")


class ShouldStartSessionError(SessionError):
    def __init__(self) -> None:
        super().__init__("session has not been started")


class ShouldStopSessionError(SessionError):
    def __init__(self) -> None:
        super().__init__("session has not been stopped")


class InvalidStartAndEndTimesError(SessionError):
    """The stored start time is later than the stored end time."""

    def __init__(self) -> None:
        super().__init__("session start time is after its end time")


# ---------------------------------------------------------------------------
# Lap
# ---------------------------------------------------------------------------


class LapError(TrackingError):
    """Illegal operation on a :class:`core.timing.lap.Lap`."""


class LapAlreadyStartedError(LapError):
    def __init__(self, message: str = "lap is already active") -> None:
        super().__init__(message)


class LapStillActiveError(LapAlreadyStartedError):
    """Raised when asking for the duration of a lap that has not ended."""

    def __init__(self) -> None:
        super().__init__("lap has not ended yet")


class StopNonStartedLapError(LapError):
    def __init__(self) -> None:
        super().__init__("lap is not active")


class LapCannotRestartError(LapError):
    def __init__(self) -> None:
        super().__init__("lap has already ended and cannot be restarted")


# ---------------------------------------------------------------------------
# Manager / storage
# ---------------------------------------------------------------------------


class SessionManagerError(TrackingError):
    """Error surfaced by :class:`tracking.session_manager.SessionManager`."""


class CannotStartSessionTwiceError(SessionManagerError):
    def __init__(self, session_id: object) -> None:
        self.session_id = session_id
        super().__init__(f"session '{session_id}' has already been started")


class SessionStoreError(TrackingError):
    """Base class for errors raised by the shipped session stores."""


class CorruptJournalError(SessionStoreError):
    def __init__(self, path: object, line_no: int, reason: str) -> None:
        self.path = path
        self.line_no = line_no
        super().__init__(f"{path}:{line_no}: {reason}")


__all__ = [
    "TrackingError",
    "SessionError",
    "CannotStartTwiceError",
    "ShouldStartSessionError",
    "ShouldStopSessionError",
    "InvalidStartAndEndTimesError",
    "LapError",
    "LapAlreadyStartedError",
    "LapStillActiveError",
    "StopNonStartedLapError",
    "LapCannotRestartError",
    "SessionManagerError",
    "CannotStartSessionTwiceError",
    "SessionStoreError",
    "CorruptJournalError",
]
