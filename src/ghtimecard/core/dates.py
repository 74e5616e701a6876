"""Pure date-range logic - no I/O dependencies."""

from datetime import datetime, timedelta, timezone

KEYWORDS = (
    "today",
    "yesterday",
    "last-3days",
    "this-week",
    "last-week",
    "this-month",
    "last-month",
)


class InvalidKeyword(ValueError):
    """Raised when a date expression is not one of KEYWORDS."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__(f"Invalid date: {keyword!r} (expected one of: {', '.join(KEYWORDS)})")


def _is_local_offset(now: datetime) -> bool:
    """True if `now` carries a fixed offset equal to the machine's local one."""
    if not isinstance(now.tzinfo, timezone):
        return False
    return now.utcoffset() == now.replace(tzinfo=None).astimezone().utcoffset()


def _localize(wall: datetime, now: datetime) -> datetime:
    """
    Attach `now`'s timezone to a naive wall-clock time.

    Fixed offsets from `datetime.now().astimezone()` stand for local time, so
    they're re-resolved through the local zone; the offset of the result may
    differ from `now`'s across a DST change.
    """
    if now.tzinfo is None:
        return wall
    if _is_local_offset(now):
        return wall.astimezone()
    return wall.replace(tzinfo=now.tzinfo)


def _midnight(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _monday_wall(now: datetime) -> datetime:
    wall = now.replace(tzinfo=None)
    return _midnight(wall - timedelta(days=wall.weekday()))


def start_of_week(now: datetime) -> datetime:
    """Midnight of the Monday on or before `now` (Sunday closes the week)."""
    return _localize(_monday_wall(now), now)


def start_of_month(now: datetime) -> datetime:
    """Midnight of the first day of `now`'s month."""
    return _localize(_midnight(now.replace(tzinfo=None, day=1)), now)


def resolve(keyword: str, now: datetime) -> datetime:
    """
    Resolve a relative date keyword to the instant a report begins at.

    Pure function - `now` is always passed in. Calendar math happens on
    `now`'s wall clock and the result is placed back in its timezone
    (naive in, naive out; naive datetimes are local time).

    Raises:
        InvalidKeyword: keyword is not one of KEYWORDS
    """
    match keyword:
        case "today":
            return now
        case "yesterday":
            return now - timedelta(days=1)
        case "last-3days":
            return now - timedelta(days=3)
        case "this-week":
            return start_of_week(now)
        case "last-week":
            return _localize(_monday_wall(now) - timedelta(days=7), now)
        case "this-month":
            return start_of_month(now)
        case "last-month":
            first = _midnight(now.replace(tzinfo=None, day=1))
            if first.month == 1:
                first = first.replace(year=first.year - 1, month=12)
            else:
                first = first.replace(month=first.month - 1)
            return _localize(first, now)
        case _:
            raise InvalidKeyword(keyword)
