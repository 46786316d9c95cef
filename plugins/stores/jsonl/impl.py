"""Persistent session store backed by an append-only JSONL journal.

Every ``register``/``update`` appends a full ``put`` snapshot and every
``remove`` appends a ``remove`` marker.  On open the journal is replayed in
order so the last line for an id wins.  The replayed table is kept in memory;
reads never touch the file.

Durability is whatever ``flush`` + ``os.fsync`` give on the host file system.
Concurrent writers in *different* processes are not coordinated.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from core.records import JournalEntry, SessionRecord, record_dump
from core.timing.errors import CorruptJournalError
from core.timing.session import Session
from sdk.ids import SessionId

logger = logging.getLogger(__name__)


class JsonlSessionStore:
    def __init__(self, path: Path, fsync: bool = True) -> None:
        self.path = Path(path)
        self.fsync = fsync
        self._lock = asyncio.Lock()
        self._records: Dict[str, SessionRecord] = {}
        self._replay()

    # ------------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------------
    def _replay(self) -> None:
        if not self.path.exists():
            return
        lines = 0
        with self.path.open("r", encoding="utf-8") as fh:
            for line_no, raw in enumerate(fh, start=1):
                if not raw.strip():
                    continue
                try:
                    entry = JournalEntry.model_validate(json.loads(raw))
                    key = entry.key
                except (json.JSONDecodeError, ValidationError, ValueError) as exc:
                    raise CorruptJournalError(self.path, line_no, str(exc)) from exc
                if entry.op == "put":
                    if entry.session is None:
                        raise CorruptJournalError(self.path, line_no, "put entry without session")
                    self._records[key] = entry.session
                else:
                    self._records.pop(key, None)
                lines += 1
        logger.info("replayed %d journal entries from %s (%d sessions)", lines, self.path, len(self._records))

    def _append(self, entry: JournalEntry) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(record_dump(entry), ensure_ascii=False)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
            fh.flush()
            if self.fsync:
                os.fsync(fh.fileno())

    async def _commit(self, key: str, entry: JournalEntry) -> None:
        # journal line and table change land together even if the caller is cancelled
        async with self._lock:
            if entry.op == "remove" and key not in self._records:
                return
            await asyncio.to_thread(self._append, entry)
            if entry.op == "put":
                self._records[key] = entry.session  # type: ignore[assignment]
            else:
                del self._records[key]

    async def _put(self, session: Session) -> None:
        await asyncio.shield(self._commit(session.id.value, JournalEntry.put(session)))

    # ------------------------------------------------------------------
    # SessionStore
    # ------------------------------------------------------------------
    async def register(self, session: Session) -> None:
        await self._put(session)
        logger.debug("registered session %s in %s", session.id, self.path)

    async def update(self, session: Session) -> None:
        await self._put(session)

    async def remove(self, session: Session) -> None:
        await asyncio.shield(self._commit(session.id.value, JournalEntry.remove(session.id)))

    async def session(self, for_id: SessionId) -> Optional[Session]:
        async with self._lock:
            record = self._records.get(for_id.value)
            return record.to_session() if record is not None else None

    def __len__(self) -> int: return len(self._records)


__all__ = ["JsonlSessionStore"]
