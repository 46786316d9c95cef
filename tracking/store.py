"""Storage capability for sessions.

Stores hold sessions by value keyed by :class:`SessionId`, one entry per id,
last write wins.  All operations are coroutines; implementations serialise
access to their own table but offer no transaction spanning several calls.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from core.timing.session import Session
from sdk.ids import SessionId


@runtime_checkable
class SessionStore(Protocol):
    async def register(self, session: Session) -> None:
        """Store ``session``, replacing any entry with the same id."""

    async def remove(self, session: Session) -> None:
        """Drop the entry for ``session.id``; a missing entry is not an error."""

    async def update(self, session: Session) -> None:
        """Replace the stored entry for ``session.id``."""

    async def session(self, for_id: SessionId) -> Optional[Session]:
        """Return a copy of the stored session, or ``None``."""


__all__ = ["SessionStore"]
