"""Date range normalization to inclusive UTC day boundaries."""

import re
from datetime import UTC, datetime, timedelta

from productwise.core.entities.period import DateRange

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _utc_midnight(value: str | None) -> datetime | None:
    """UTC midnight of a YYYY-MM-DD string, or None when absent or malformed."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return None
    try:
        day = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return None
    return day.replace(tzinfo=UTC)


def normalize(from_date: str | None = None, to_date: str | None = None) -> DateRange:
    """
    Convert optional calendar dates into a half-open instant range.

    The end bound is midnight of the day after to_date, so every movement
    on to_date is included whatever its time of day. A to_date on the last
    representable day leaves the end unbounded.
    """
    start = _utc_midnight(from_date)
    end = _utc_midnight(to_date)
    if end is not None:
        try:
            end += timedelta(days=1)
        except OverflowError:
            end = None
    return DateRange(start=start, end_exclusive=end)
