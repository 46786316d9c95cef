"""Session state machine.

A :class:`Session` is a plain mutable value.  Its lifecycle status is never
stored; :meth:`Session.status` derives it from the two timestamps on every call:

====================  ==================  ===============================
start_time            end_time            status
====================  ==================  ===============================
absent                (ignored)           ``IDLE``
set                   absent              ``RUNNING``
set                   set, >= start       ``COMPLETED``
set                   set, < start        ``INVALID_START_TIME_IN_FUTURE``
====================  ==================  ===============================

Sessions carry no locking of their own; callers sharing one across tasks or
threads must provide their own exclusion.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sdk.ids import SessionId, as_utc

from .errors import (
    CannotStartTwiceError,
    InvalidStartAndEndTimesError,
    LapAlreadyStartedError,
    ShouldStartSessionError,
    ShouldStopSessionError,
)
from .lap import Lap

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    INVALID_START_TIME_IN_FUTURE = "invalid:start_time_in_future"

    @property
    def is_invalid(self) -> bool:
        return self is SessionStatus.INVALID_START_TIME_IN_FUTURE


@dataclass
class Session:
    id: SessionId
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    laps: List[Lap] = field(default_factory=list)

    def __setattr__(self, name, value):
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("session id is immutable")
        super().__setattr__(name, value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def status(self) -> SessionStatus:
        if self.start_time is None:
            return SessionStatus.IDLE
        if self.end_time is None:
            return SessionStatus.RUNNING
        if self.start_time > self.end_time:
            return SessionStatus.INVALID_START_TIME_IN_FUTURE
        return SessionStatus.COMPLETED

    def start(self, at: Optional[datetime] = None) -> None:
        """Start an idle session.  A session can be started once in its life."""

        if self.status() is not SessionStatus.IDLE:
            raise CannotStartTwiceError()
        self.start_time = as_utc(at)
        logger.debug("session %s started at %s", self.id, self.start_time.isoformat())

    def stop(self, at: Optional[datetime] = None) -> None:
        if self.status() is not SessionStatus.RUNNING:
            raise ShouldStartSessionError()
        self.end_time = as_utc(at)
        logger.debug("session %s stopped at %s", self.id, self.end_time.isoformat())

    def duration(self) -> float:
        """Elapsed seconds of a completed session, never negative."""

        if self.start_time is None:
            raise ShouldStartSessionError()
        if self.end_time is None:
            raise ShouldStopSessionError()
        if self.status().is_invalid:
            raise InvalidStartAndEndTimesError()
        return (self.end_time - self.start_time).total_seconds()

    # ------------------------------------------------------------------
    # Laps
    # ------------------------------------------------------------------
    def add_lap(self, at: Optional[datetime] = None) -> Lap:
        lap = Lap(start_time=as_utc(at))
        if not lap.is_active:
            raise LapAlreadyStartedError("new lap could not be started")
        self.laps.append(lap)
        return lap

    def get_lap(self, position: int) -> Optional[Lap]:
        if 0 <= position < len(self.laps):
            return self.laps[position]
        return None

    def stop_lap(self, position: int, at: Optional[datetime] = None) -> None:
        """Stop the lap at ``position``; out of range positions are ignored."""

        lap = self.get_lap(position)
        if lap is None:
            logger.debug("session %s has no lap at position %d", self.id, position)
            return
        lap.stop(at)

    def copy(self) -> "Session":
        return copy.deepcopy(self)


__all__ = ["Session", "SessionStatus"]
