"""Date helpers that never raise.

Records keep their dates as ISO-8601 strings, and older rows can hold
anything (empty strings, epoch numbers, garbage). Every helper here parses
leniently and falls back to a placeholder instead of failing the page.
"""
import datetime as dt
import math
from typing import Any, Optional

import pandas as pd

LIST_FORMAT = '%m/%d %H:%M'
SHORT_FORMAT = '%b %d, %Y'
DETAIL_FORMAT = '%B %d, %Y'
DETAIL_DATETIME_FORMAT = '%B %d, %Y %H:%M'
FORM_FORMAT = '%Y-%m-%d'


def now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).replace(microsecond=0).isoformat().replace('+00:00', 'Z')


def safe_date(value: Any) -> Optional[dt.datetime]:
    """Return a datetime for ``value`` or None when it cannot be interpreted.

    Numbers are epoch milliseconds. Plain dates become midnight.
    """
    if value is None or value == '' or isinstance(value, bool):
        return None
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day)
    try:
        if isinstance(value, (int, float)):
            if math.isnan(value):
                return None
            ts = pd.to_datetime(value, unit='ms', errors='coerce')
        elif isinstance(value, str):
            ts = pd.to_datetime(value.strip(), errors='coerce')
        else:
            return None
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def safe_format(value: Any, fmt: str, fallback: str = 'No date') -> str:
    date = safe_date(value)
    if date is None:
        return fallback
    try:
        return date.strftime(fmt)
    except (ValueError, TypeError):
        return fallback


def format_list_date(value: Any) -> str:
    return safe_format(value, LIST_FORMAT, 'No record')


def format_short_date(value: Any) -> str:
    return safe_format(value, SHORT_FORMAT)


def format_detail_date(value: Any) -> str:
    return safe_format(value, DETAIL_FORMAT)


def format_detail_datetime(value: Any) -> str:
    return safe_format(value, DETAIL_DATETIME_FORMAT)


def format_form_date(value: Any) -> str:
    return safe_format(value, FORM_FORMAT, '')


def is_valid_date(value: Any) -> bool:
    return safe_date(value) is not None


def _as_naive_utc(value: dt.datetime) -> dt.datetime:
    # aware and naive datetimes cannot be subtracted from each other
    if value.tzinfo is None:
        return value
    return value.astimezone(dt.timezone.utc).replace(tzinfo=None)


def duration_days(start: Any, end: Any = None, now: Optional[dt.datetime] = None) -> int:
    """Whole days between start and end (or now), rounded up. 0 if start is invalid."""
    start_dt = safe_date(start)
    if end is not None and end != '':
        end_dt = safe_date(end)
    else:
        end_dt = now or dt.datetime.now(dt.timezone.utc)
    if start_dt is None or end_dt is None:
        return 0
    delta = abs(_as_naive_utc(end_dt) - _as_naive_utc(start_dt))
    return math.ceil(delta.total_seconds() / 86400)


def is_within_days(value: Any, days: int, now: Optional[dt.datetime] = None) -> bool:
    """True when ``value`` falls after ``now - days``."""
    date = safe_date(value)
    if date is None:
        return False
    now = now or dt.datetime.now(dt.timezone.utc)
    return _as_naive_utc(date) > _as_naive_utc(now) - dt.timedelta(days=days)
