"""Locale-aware rendering of numbers and timestamps for CSV cells."""

import logging
import math
from datetime import date, datetime, timezone
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_time, get_datetime_format
from babel.numbers import format_decimal

from common.errors import ConfigError

logger = logging.getLogger(__name__)

# Significant digits kept for durations
SIGNIFICANT_DIGITS = 10
SAMPLE_NUMBER = 5.15


class ValueFormatter:
    """Formats cell values for one locale (e.g. ``de-DE`` or ``en_US``)."""

    def __init__(self, locale: str = 'de-DE'):
        self.locale_name = locale
        try:
            self.locale = Locale.parse(locale.replace('-', '_'))
        except (UnknownLocaleError, ValueError) as e:
            raise ConfigError(f"Unknown locale {locale!r}") from e

    def format_number(self, value) -> str:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, float):
            if not math.isfinite(value):
                return str(value)
            value = Decimal(f"{value:.{SIGNIFICANT_DIGITS}g}")
        return format_decimal(value, locale=self.locale, decimal_quantization=False)

    def format_datetime(self, value: datetime) -> str:
        """Short date, medium time, in UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        pattern = get_datetime_format('short', locale=self.locale)
        return (
            pattern
            .replace('{1}', format_date(value, 'short', locale=self.locale))
            .replace('{0}', format_time(value, 'medium', locale=self.locale))
        )

    def format_value(self, value) -> str:
        if value is None:
            return ''
        if isinstance(value, datetime):
            return self.format_datetime(value)
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, (int, float, Decimal)):
            return self.format_number(value)
        return str(value)


def check_delimiter(formatter: ValueFormatter, delimiter: str) -> bool:
    """Warn if the locale's dates or numbers would contain the delimiter.

    Advisory only: the caller proceeds either way.
    """
    sample_date = formatter.format_datetime(datetime.now(timezone.utc))
    sample_number = formatter.format_number(SAMPLE_NUMBER)

    safe = True
    if delimiter in sample_date:
        logger.warning(
            f"Delimiter {delimiter!r} occurs in {formatter.locale_name} dates "
            f"({sample_date}); pick another delimiter or locale"
        )
        safe = False
    if delimiter in sample_number:
        logger.warning(
            f"Delimiter {delimiter!r} occurs in {formatter.locale_name} numbers "
            f"({sample_number}); pick another delimiter or locale"
        )
        safe = False
    return safe
