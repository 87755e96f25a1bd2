"""Local calendar-date helpers and date-key bucketing.

Every date key in the engine comes from :func:`to_date_key`, which reads the
calendar date the viewer's clock would show for an instant. Keys are never cut
out of an ISO string, since the UTC date of an instant differs from the local
one for several hours around midnight.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, time, tzinfo
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DateKey = str
NO_DATE_KEY: DateKey = "No Date"

__all__ = [
    "DateKey",
    "NO_DATE_KEY",
    "bucket_by_date_key",
    "date_from_key",
    "days_in_month",
    "event_date_key",
    "first_weekday",
    "parse_date",
    "parse_instant",
    "shift_months",
    "task_date_key",
    "to_date_key",
    "to_local",
]


def parse_instant(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 instant, returning :data:`None` when it cannot be read.

    Date-only values are read as local midnight. A trailing ``Z`` is accepted.
    """

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    cleaned = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        logger.debug("Unparsable instant %r", value)
        return None


def parse_date(value: object, tz: tzinfo | None = None) -> Optional[date]:
    """Parse a date-only value such as a task due date.

    Values carrying a time of day are projected to the local date first.
    """

    if isinstance(value, datetime):
        return to_local(value, tz).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError:
            logger.debug("Unparsable date %r", value)
            return None

    instant = parse_instant(text)
    if instant is None:
        return None
    return to_local(instant, tz).date()


def to_local(instant: datetime, tz: tzinfo | None = None) -> datetime:
    """Project ``instant`` into the viewer's timezone.

    Naive datetimes are taken to be local wall-clock time already. Aware ones are
    converted with :meth:`datetime.astimezone`, which uses the system zone when
    ``tz`` is :data:`None`.
    """

    if instant.tzinfo is None:
        return instant
    return instant.astimezone(tz)


def to_date_key(instant: object, tz: tzinfo | None = None) -> Optional[DateKey]:
    """Return the ``YYYY-MM-DD`` key of the local calendar date of ``instant``."""

    if isinstance(instant, date) and not isinstance(instant, datetime):
        return instant.isoformat()
    parsed = parse_instant(instant)
    if parsed is None:
        return None
    return to_local(parsed, tz).date().isoformat()


def date_from_key(key: DateKey) -> Optional[date]:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError):
        return None


def event_date_key(entry, tz: tzinfo | None = None) -> Optional[DateKey]:
    """Key events by the local date of their start instant."""

    start = getattr(entry, "start", None)
    if start is None:
        return None
    return to_date_key(start, tz)


def task_date_key(entry, tz: tzinfo | None = None) -> Optional[DateKey]:
    """Key tasks by their due date."""

    due = getattr(entry, "due_date", None)
    if due is None:
        return None
    return to_date_key(due, tz)


def bucket_by_date_key(
    entries: Iterable[T],
    key_fn: Callable[[T], Optional[DateKey]],
    *,
    include_undated: bool = False,
) -> Dict[DateKey, List[T]]:
    """Group ``entries`` by the date key returned from ``key_fn``.

    Input order is preserved inside each bucket. Entries without a key are
    dropped, unless ``include_undated`` is set, in which case they are collected
    under :data:`NO_DATE_KEY`. Grid views must leave ``include_undated`` off.
    """

    buckets: Dict[DateKey, List[T]] = {}
    for entry in entries:
        key = key_fn(entry)
        if key is None:
            if not include_undated:
                continue
            key = NO_DATE_KEY
        buckets.setdefault(key, []).append(entry)
    return buckets


# ---------------------------------------------------------------------------
# Month arithmetic
# ---------------------------------------------------------------------------


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the first day of the month, with Sunday as 0."""

    monday_based = calendar.monthrange(year, month)[0]
    return (monday_based + 1) % 7


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping to the last day of the target month."""

    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, days_in_month(year, month)))
