"""Read-only view of a tracked session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.timing.errors import ShouldStartSessionError
from core.timing.session import Session
from sdk.ids import SessionId


@dataclass(frozen=True)
class Task:
    id: SessionId
    start_time: datetime
    end_time: Optional[datetime] = None

    @property
    def duration(self) -> Optional[float]:
        """Seconds spent on the task, or ``None`` while unfinished or inconsistent."""

        if self.end_time is None or self.end_time < self.start_time:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @classmethod
    def from_session(cls, session: Session) -> "Task":
        if session.start_time is None:
            raise ShouldStartSessionError()
        return cls(id=session.id, start_time=session.start_time, end_time=session.end_time)


__all__ = ["Task"]
