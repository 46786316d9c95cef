# tests/unit/test_memory_store.py
from datetime import datetime, timezone

import pytest

from core.timing.session import Session, SessionStatus
from plugins.stores.memory.impl import InMemorySessionStore
from sdk.ids import SessionId
from tracking.store import SessionStore

SID = SessionId("test")
T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemorySessionStore()


def test_satisfies_store_protocol(store):
    assert isinstance(store, SessionStore)


@pytest.mark.asyncio
async def test_register_update_remove(store):
    session = Session(id=SID)
    assert await store.session(SID) is None

    await store.register(session)
    stored = await store.session(SID)
    assert stored == session
    assert stored.status() is SessionStatus.IDLE

    session.start(T0)
    await store.update(session)
    assert (await store.session(SID)).status() is SessionStatus.RUNNING

    await store.remove(session)
    assert await store.session(SID) is None


@pytest.mark.asyncio
async def test_sessions_are_held_by_value(store):
    session = Session(id=SID)
    await store.register(session)

    # caller-side mutation does not leak into the store
    session.start(T0)
    assert (await store.session(SID)).status() is SessionStatus.IDLE

    # and neither does mutating a read copy
    copy = await store.session(SID)
    copy.add_lap()
    assert (await store.session(SID)).laps == []


@pytest.mark.asyncio
async def test_instances_do_not_share_state(store):
    await store.register(Session(id=SID))
    assert await InMemorySessionStore().session(SID) is None


@pytest.mark.asyncio
async def test_removing_unknown_session_is_not_an_error(store):
    await store.remove(Session(id=SID))
    assert len(store) == 0
