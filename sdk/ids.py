from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import ulid


def now_utc() -> datetime: return datetime.now(timezone.utc)
def new_ulid() -> str: return str(ulid.new())


def as_utc(at: Optional[datetime] = None) -> datetime:
    """Return ``at`` as an aware datetime (naive values are taken as UTC), or now."""
    if at is None:
        return now_utc()
    return at.replace(tzinfo=timezone.utc) if at.tzinfo is None else at


@dataclass(frozen=True, order=True)
class SessionId:
    """Opaque identifier of a tracked session."""
    value: str

    @classmethod
    def new(cls) -> "SessionId": return cls(new_ulid())

    def __str__(self) -> str: return self.value


@dataclass(frozen=True, order=True)
class LapId:
    value: str = field(default_factory=new_ulid)

    def __str__(self) -> str: return self.value
