from __future__ import annotations
import asyncio
import logging
from typing import Dict, Optional
from core.timing.session import Session
from sdk.ids import SessionId

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Session table owned by one store instance; copies in and out."""
    def __init__(self) -> None:
        self._sessions: Dict[SessionId, Session] = {}
        self._lock = asyncio.Lock()

    async def register(self, session: Session) -> None:
        async with self._lock:
            self._sessions[session.id] = session.copy()
        logger.debug("registered session %s", session.id)

    async def remove(self, session: Session) -> None:
        async with self._lock:
            self._sessions.pop(session.id, None)
        logger.debug("removed session %s", session.id)

    async def update(self, session: Session) -> None:
        async with self._lock:
            self._sessions[session.id] = session.copy()

    async def session(self, for_id: SessionId) -> Optional[Session]:
        async with self._lock:
            stored = self._sessions.get(for_id)
            return stored.copy() if stored is not None else None

    def __len__(self) -> int: return len(self._sessions)
