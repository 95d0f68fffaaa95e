"""
Turn user-supplied time arguments into timestamps.

A time argument can be:
- a date and/or time, like "2020-10-04", "2020-10-04 3pm" or "8pm"
- a signed duration relative to now, like "-8h", "-45m" or "5m23s"

A time without a date means the most recent time it happened, so at 10am "8pm" is
yesterday evening and "7am" is this morning.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser

from tot.errors import UnrecognizedTime

logger = logging.getLogger(__name__)

DURATION_SCALARS = {
    "w": timedelta(weeks=1),
    "d": timedelta(days=1),
    "h": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
}

DURATION_RE = re.compile(
    r"^(?P<sign>[+-])?"
    + "".join(rf"(?:(?P<{unit}>\d+){unit})?" for unit in DURATION_SCALARS)
    + "$"
)

# Two defaults which differ in every date field and in the hour. Parsing a token
# against both shows which fields the token actually supplied. Both are leap years
# in 31-day months so that any day the token names ("Feb 29", "31") fits.
_DEFAULT_A = datetime(2000, 1, 1, 0, 0, 0)
_DEFAULT_B = datetime(2004, 3, 2, 1, 0, 0)


@dataclass
class TimeBound:
    when: datetime

    # True if this came from a bare date, e.g. "2020-10-05", and so means that whole
    # day rather than an instant
    whole_day: bool = False


def parse_duration(token: str) -> timedelta:
    """
    Parse a signed duration like "-8h" or "1d12h30m". Units have to be given largest
    first. Raises a ValueError if the token isn't a duration.
    """
    m = DURATION_RE.match(token.strip())
    if not m or not any(m.group(unit) for unit in DURATION_SCALARS):
        raise ValueError(f"Not a duration: {token}")

    delta = timedelta()
    for unit, scalar in DURATION_SCALARS.items():
        n = m.group(unit)
        if n:
            delta += int(n) * scalar

    if m.group("sign") == "-":
        delta = -delta
    return delta


def _looks_like_duration(token: str) -> bool:
    try:
        parse_duration(token)
    except ValueError:
        return False
    return True


def _parse_absolute(token: str, now: datetime) -> Optional[TimeBound]:
    """
    Parse a date and/or time. Returns None if the token isn't one.
    """
    # dateutil will happily read "-8h" as 08:00 and "5m23s" as 00:05:23, but those are
    # durations
    if _looks_like_duration(token):
        return None

    try:
        a = date_parser.parse(token, default=_DEFAULT_A)
        b = date_parser.parse(token, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None

    has_date = a.year == b.year or a.month == b.month or a.day == b.day
    has_time = a.hour == b.hour
    if not has_date and not has_time:
        return None

    if not has_date:
        specified = a.time()
        if a.tzinfo is not None:
            # "8pm UTC" is whatever that is in local time
            specified = datetime.combine(now.date(), a.timetz()).astimezone().time()
        if now.time() < specified:
            day = (now - timedelta(days=1)).date()
        else:
            day = now.date()
        return TimeBound(datetime.combine(day, specified))

    # Fill in anything missing from the date (e.g. the year in "Oct 4") from today
    try:
        when = date_parser.parse(token, default=datetime.combine(now.date(), time()))
    except (ValueError, OverflowError):
        # e.g. "Feb 29" when this isn't a leap year
        return None
    if when.tzinfo is not None:
        when = when.astimezone().replace(tzinfo=None)
    return TimeBound(when, whole_day=not has_time)


def resolve_bound(token: Optional[str], now: datetime) -> TimeBound:
    """
    Resolve a time argument, keeping track of whether it named a whole day
    """
    if not token:
        return TimeBound(now)

    bound = _parse_absolute(token, now)
    if bound is not None:
        logger.debug(f"{token!r} is an absolute time: {bound}")
        return bound

    try:
        delta = parse_duration(token)
    except ValueError:
        raise UnrecognizedTime(token) from None

    logger.debug(f"{token!r} is a duration of {delta} from {now}")
    return TimeBound(now + delta)


def resolve_time(token: Optional[str], now: datetime) -> datetime:
    """
    Resolve a time argument to a timestamp, relative to `now`. An empty token means
    now. Raises UnrecognizedTime if the token is neither a time nor a duration.
    """
    return resolve_bound(token, now).when
