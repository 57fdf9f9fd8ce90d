"""Date tokens and calendar-day ranges.

All dates are UTC calendar days rendered as YYYY-MM-DD. Accepted tokens:
``today``, ``yesterday``, ``YYYY-MM-DD`` and ``YYYY-MM-DDTHH:MM:SSZ``.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from common.errors import InvalidDateFormat, InvalidDateRange

DATE_RE = re.compile(r"\d{4}(-\d{2}){2}(T(\d{2}:){2}\d{2}Z)?")
DAY = timedelta(days=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_date(token: str, now: Optional[datetime] = None) -> str:
    """Resolve a date token to a concrete date string.

    Relative markers become YYYY-MM-DD; explicit dates and timestamps are
    returned unchanged.
    """
    if now is None:
        now = _utcnow()

    if token == "today":
        return now.strftime("%Y-%m-%d")

    if token == "yesterday":
        return (now - DAY).strftime("%Y-%m-%d")

    if isinstance(token, str) and DATE_RE.fullmatch(token):
        return token

    raise InvalidDateFormat(token)


def parse_date(value: str) -> datetime:
    """Parse a normalized date or timestamp into an aware UTC datetime."""
    if "T" in value:
        parsed = datetime.strptime(value, "%Y-%m-%dT%H:%M:%SZ")
    else:
        parsed = datetime.strptime(value, "%Y-%m-%d")
    return parsed.replace(tzinfo=timezone.utc)


def get_dates_from_range(
    start: str,
    end: str,
    now: Optional[datetime] = None,
) -> List[str]:
    """Inclusive, ascending list of calendar days between two tokens."""
    start = normalize_date(start, now)
    end = normalize_date(end, now)

    try:
        start_dt = parse_date(start)
        end_dt = parse_date(end)
    except ValueError as e:
        # Matches the pattern but is not a real date, e.g. 2024-13-45
        raise InvalidDateFormat(f"{start}..{end}") from e

    if end_dt < start_dt:
        raise InvalidDateRange(start, end)

    days = int((end_dt - start_dt) / DAY) + 1
    return [(start_dt + i * DAY).strftime("%Y-%m-%d") for i in range(days)]


def get_date_range(days: int, now: Optional[datetime] = None) -> Tuple[str, str]:
    """(today - days, yesterday) for "last N days" commands."""
    if now is None:
        now = _utcnow()
    start = (now - days * DAY).strftime("%Y-%m-%d")
    return start, normalize_date("yesterday", now)
