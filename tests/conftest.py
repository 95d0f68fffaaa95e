import pytest

from tot.clock import TestClock
from tot.storage import MemoryDataAccessor


@pytest.fixture
def clock() -> TestClock:
    return TestClock()


@pytest.fixture
def memory_accessor(clock: TestClock) -> MemoryDataAccessor:
    return MemoryDataAccessor(clock)
