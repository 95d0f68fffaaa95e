"""
tot utility functions
"""

from datetime import datetime
from typing import Iterable

from tot.constants import FIELD_DELIMITER, TIMESTAMP_FORMAT
from tot.errors import InvalidValue


def format_timestamp(ts: datetime) -> str:
    """
    Format a timestamp the way it's stored - YYYY-MM-DDTHH:MM:SS, dropping any
    fractional seconds
    """
    return ts.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(ts_str: str) -> datetime:
    """
    Parse a stored timestamp. Anything not in the exact stored format raises a
    ValueError, since only tot writes these.
    """
    return datetime.strptime(ts_str, TIMESTAMP_FORMAT)


def check_fields(fields: Iterable[str], kind: str = "Values") -> None:
    """
    Raise InvalidValue for the first field that would break a stored line
    """
    fields = list(fields)
    for field in fields:
        if FIELD_DELIMITER in field:
            raise InvalidValue(field, "commas", kind)
    for field in fields:
        if "\n" in field or "\r" in field:
            raise InvalidValue(field, "newlines", kind)
