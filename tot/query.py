"""
Reading series back out: parsing timestamps, sorting, and filtering
"""

from dataclasses import dataclass
from datetime import datetime, time
from itertools import islice
from typing import Iterable

from tot.constants import FIELD_DELIMITER
from tot.storage.base import DataAccessor
from tot.timeparse import TimeBound
from tot.util import parse_timestamp


@dataclass
class SeriesEntry:
    # The line exactly as stored
    line: str
    timestamp: datetime

    @classmethod
    def parse(cls, line: str) -> "SeriesEntry":
        return cls(line, parse_timestamp(line.split(FIELD_DELIMITER, 1)[0]))


def read_series_data(accessor: DataAccessor, name: str) -> list[SeriesEntry]:
    """
    Read every row of a series, oldest first. Rows are stored in the order they were
    appended, which isn't necessarily chronological.
    """
    # Skip the header
    rows = islice(accessor.read_lines(name), 1, None)
    return sorted((SeriesEntry.parse(line) for line in rows), key=lambda e: e.timestamp)


def filter_after(entries: Iterable[SeriesEntry], bound: TimeBound) -> list[SeriesEntry]:
    """
    Keep entries at or after the bound. A whole-day bound keeps only that day.
    """
    if bound.whole_day:
        day = bound.when.date()
        return [e for e in entries if e.timestamp.date() == day]
    return [e for e in entries if e.timestamp >= bound.when]


def unique_days(entries: Iterable[SeriesEntry]) -> list[datetime]:
    """
    The distinct days entries fall on, as midnight timestamps, ascending
    """
    days = {e.timestamp.date() for e in entries}
    return [datetime.combine(d, time()) for d in sorted(days)]


def latest_entries(accessor: DataAccessor) -> list[tuple[str, SeriesEntry]]:
    """
    The most recent entry of each series, ordered by those entries' timestamps. Series
    with no entries are left out.
    """
    latest = []
    for name in accessor.list_series():
        entries = read_series_data(accessor, name)
        if entries:
            latest.append((name, entries[-1]))

    return sorted(latest, key=lambda t: (t[1].timestamp, t[0]))
