"""Serialisable snapshots of sessions used by persistent stores."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from core.timing.lap import Lap
from core.timing.session import Session
from sdk.ids import LapId, SessionId


class LapRecord(BaseModel):
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None


class SessionRecord(BaseModel):
    """Snapshot of a :class:`Session` and all of its laps."""

    id: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    laps: List[LapRecord] = Field(default_factory=list)

    @classmethod
    def from_session(cls, session: Session) -> "SessionRecord":
        return cls(
            id=session.id.value,
            start_time=session.start_time,
            end_time=session.end_time,
            laps=[
                LapRecord(id=lap.id.value, start_time=lap.start_time, end_time=lap.end_time)
                for lap in session.laps
            ],
        )

    def to_session(self) -> Session:
        return Session(
            id=SessionId(self.id),
            start_time=self.start_time,
            end_time=self.end_time,
            laps=[
                Lap(start_time=lap.start_time, end_time=lap.end_time, id=LapId(lap.id))
                for lap in self.laps
            ],
        )


class JournalEntry(BaseModel):
    """One line of the session journal: a full replacement or a removal."""

    op: Literal["put", "remove"]
    id: Optional[str] = None
    session: Optional[SessionRecord] = None

    @classmethod
    def put(cls, session: Session) -> "JournalEntry":
        return cls(op="put", session=SessionRecord.from_session(session))

    @classmethod
    def remove(cls, session_id: SessionId) -> "JournalEntry":
        return cls(op="remove", id=session_id.value)

    @property
    def key(self) -> str:
        if self.session is not None:
            return self.session.id
        if self.id is None:
            raise ValueError("journal entry has neither id nor session")
        return self.id


def record_dump(entry: BaseModel) -> Dict[str, Any]:
    """Return a JSON-compatible ``dict`` for ``entry``, dropping unset optionals."""

    return entry.model_dump(mode="json", exclude_none=True)


__all__ = ["LapRecord", "SessionRecord", "JournalEntry", "record_dump"]
