"""A single timed sub-interval inside a session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from sdk.ids import LapId, as_utc, now_utc

from .errors import (
    LapAlreadyStartedError,
    LapCannotRestartError,
    LapStillActiveError,
    StopNonStartedLapError,
)

logger = logging.getLogger(__name__)


class LapStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Lap:
    """Sub-interval that is active from construction until it is stopped.

    A stopped lap keeps its end time forever; there is no restart path.
    """

    start_time: datetime = field(default_factory=now_utc)
    end_time: Optional[datetime] = None
    id: LapId = field(default_factory=LapId)

    def __post_init__(self) -> None:
        self.start_time = as_utc(self.start_time)
        if self.end_time is not None:
            self.end_time = as_utc(self.end_time)

    def status(self) -> LapStatus:
        return LapStatus.ACTIVE if self.end_time is None else LapStatus.INACTIVE

    @property
    def is_active(self) -> bool:
        return self.status() is LapStatus.ACTIVE

    def start(self, at: Optional[datetime] = None) -> None:
        if self.status() is LapStatus.ACTIVE:
            raise LapAlreadyStartedError()
        raise LapCannotRestartError()

    def stop(self, at: Optional[datetime] = None) -> None:
        if self.status() is not LapStatus.ACTIVE:
            raise StopNonStartedLapError()
        self.end_time = as_utc(at)
        logger.debug("lap %s stopped at %s", self.id, self.end_time.isoformat())

    def duration(self) -> float:
        """Seconds between start and end.

        Unlike :meth:`Session.duration` the ordering of the two timestamps is
        not checked, so a caller-supplied early stop time yields a negative
        value.
        """

        if self.end_time is None:
            raise LapStillActiveError()
        return (self.end_time - self.start_time).total_seconds()


__all__ = ["Lap", "LapStatus"]
