from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """
        Current local time, naive
        """


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now()


class TestClock(Clock):
    """
    A clock that only moves when told to
    """

    # Keep pytest from trying to collect this
    __test__ = False

    def __init__(self, now: Optional[datetime] = None) -> None:
        self._now = now if now is not None else datetime(2020, 9, 1)

    def now(self) -> datetime:
        return self._now

    def advance_to(self, when: datetime) -> None:
        self._now = when

    def advance_by(self, delta: timedelta) -> None:
        self._now += delta


SYSTEM_CLOCK = SystemClock()
