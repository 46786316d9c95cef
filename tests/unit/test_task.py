# tests/unit/test_task.py
from datetime import datetime, timedelta, timezone

import pytest

from core.task import Task
from core.timing.errors import ShouldStartSessionError
from core.timing.session import Session
from sdk.ids import SessionId

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def test_duration_of_finished_task():
    task = Task(id=SessionId("t"), start_time=T0, end_time=T0 + timedelta(minutes=2))
    assert task.duration == 120.0


def test_duration_is_none_while_running_or_inconsistent():
    assert Task(id=SessionId("t"), start_time=T0).duration is None
    assert Task(id=SessionId("t"), start_time=T0, end_time=T0 - timedelta(seconds=1)).duration is None


def test_from_session_requires_started_session():
    session = Session(id=SessionId("t"))
    with pytest.raises(ShouldStartSessionError):
        Task.from_session(session)
    session.start(T0)
    task = Task.from_session(session)
    assert task.id == session.id
    assert task.start_time == T0
    assert task.end_time is None
