"""Create-or-resume tracking on top of a :class:`SessionStore`."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional, Protocol

from core.timing.errors import CannotStartSessionTwiceError, CannotStartTwiceError
from core.timing.session import Session
from sdk.ids import SessionId, now_utc

from .store import SessionStore

logger = logging.getLogger(__name__)


class TimeTracking(Protocol):
    async def start_tracking(self, session_id: SessionId) -> None: ...

    async def stop_tracking(self, session_id: SessionId) -> None: ...


class _KeyedLocks:
    """One ``asyncio.Lock`` per identifier, dropped once nobody holds or awaits it."""

    def __init__(self) -> None:
        self._locks: Dict[SessionId, asyncio.Lock] = {}
        self._waiters: Dict[SessionId, int] = {}

    @asynccontextmanager
    async def hold(self, key: SessionId) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if not self._waiters[key]:
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class SessionManager:
    """Start and stop sessions by identifier against an injected store.

    ``start_tracking`` and ``stop_tracking`` are read-modify-write sequences
    over the store.  With ``serialize_per_identifier`` (the default) each
    sequence holds a per-identifier lock, so two concurrent starts of the
    same id cannot both observe an idle session.  Disabling it leaves the
    sequences unsynchronised and concurrent writers race, last write wins.
    The lock only covers callers sharing this manager instance.
    """

    def __init__(self, store: SessionStore, serialize_per_identifier: bool = True) -> None:
        self.store = store
        self._locks: Optional[_KeyedLocks] = _KeyedLocks() if serialize_per_identifier else None

    @asynccontextmanager
    async def _exclusive(self, session_id: SessionId) -> AsyncIterator[None]:
        if self._locks is None:
            yield
            return
        async with self._locks.hold(session_id):
            yield

    async def _load_or_create(self, session_id: SessionId) -> Session:
        session = await self.store.session(session_id)
        if session is None:
            logger.debug("no stored session %s, creating one", session_id)
            return Session(id=session_id)
        return session

    async def start_tracking(self, session_id: SessionId) -> None:
        async with self._exclusive(session_id):
            session = await self._load_or_create(session_id)
            try:
                session.start(now_utc())
            except CannotStartTwiceError as exc:
                logger.info("refused to start session %s twice", session_id)
                raise CannotStartSessionTwiceError(session_id) from exc
            await self.store.register(session)
        logger.info("started tracking %s", session_id)

    async def stop_tracking(self, session_id: SessionId) -> None:
        """Stop a running session; an unknown id fails like an idle session."""

        async with self._exclusive(session_id):
            session = await self._load_or_create(session_id)
            session.stop(now_utc())
            await self.store.update(session)
        logger.info("stopped tracking %s", session_id)

    async def session(self, by_id: SessionId) -> Optional[Session]:
        return await self.store.session(by_id)


__all__ = ["SessionManager", "TimeTracking"]
