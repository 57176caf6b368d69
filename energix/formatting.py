"""
Formatting Module

Display formatting for numbers, currency, percentages, dates and file
sizes. The dashboard serves French-speaking users: ``fr-FR`` is the
default everywhere (narrow no-break space grouping, comma decimals,
French month names). ``en-US`` is available for exports.

Numeric formatters return "N/A" for missing or NaN values; the UI renders
a placeholder on that sentinel.
"""

import logging
import math
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Optional

import pandas as pd

from .config import config
from .months import FRENCH_MONTHS

# Configure logging
logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
INVALID_DATE = "Invalid Date"

NARROW_NBSP = '\u202f'
NBSP = '\u00a0'

ENGLISH_MONTHS = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
)

LOCALES = {
    'fr-FR': {
        'group': NARROW_NBSP,
        'decimal': ',',
        'percent': NARROW_NBSP + '%',
        'months': tuple(m.lower() for m in FRENCH_MONTHS),
    },
    'en-US': {
        'group': ',',
        'decimal': '.',
        'percent': '%',
        'months': ENGLISH_MONTHS,
    },
}

FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB", "PB"]


def _locale(locale: Optional[str]) -> str:
    locale = locale or config.default_locale
    if locale not in LOCALES:
        logger.warning(f"Unsupported locale {locale!r}, falling back to fr-FR")
        return 'fr-FR'
    return locale


def _is_missing(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return True
    if not isinstance(value, (int, float, Decimal)) and not pd.api.types.is_number(value):
        return True
    return math.isnan(value)


def _group_digits(value: float, decimals: int, locale: str) -> str:
    """Round half away from zero (as browsers do) and apply separators."""
    if math.isinf(value):
        return "-∞" if value < 0 else "∞"
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # shortest repr digits (as Intl uses); quantize needs room for every digit
        ctx.prec = max(28, exact.adjusted() + decimals + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{decimals}f}"
    symbols = LOCALES[locale]
    return text.replace(',', '\0').replace('.', symbols['decimal']).replace('\0', symbols['group'])


def format_number(value: Any, decimals: int = 2, locale: Optional[str] = None,
                  style: str = 'decimal', currency: Optional[str] = None) -> str:
    """
    Format a number for display.

    Args:
        value: Number to format
        decimals: Fixed number of decimal places
        locale: 'fr-FR' (default) or 'en-US'
        style: 'decimal', 'currency' or 'percent' (percent multiplies by 100)
        currency: Currency code for the currency style (default TND)

    Returns:
        Formatted string, "N/A" for None/NaN
    """
    if _is_missing(value):
        return NOT_AVAILABLE

    locale = _locale(locale)
    value = float(value)

    if style == 'percent':
        return _group_digits(value * 100, decimals, locale) + LOCALES[locale]['percent']
    if style == 'currency':
        code = currency or config.default_currency
        number = _group_digits(value, decimals, locale)
        if locale == 'fr-FR':
            return f"{number}{NBSP}{code}"
        return f"{code}{NBSP}{number}"
    if style != 'decimal':
        raise ValueError(f"Unknown number style: {style}")

    return _group_digits(value, decimals, locale)


def format_currency(value: Any, decimals: int = 2, locale: Optional[str] = None,
                    currency: Optional[str] = None) -> str:
    """Format a currency amount, e.g. ``1 234,50 TND``."""
    return format_number(value, decimals=decimals, locale=locale, style='currency', currency=currency)


def format_percentage(value: Any, decimals: int = 2, locale: Optional[str] = None) -> str:
    """Format a ratio as a percentage: 0.125 -> ``12,50 %``."""
    return format_number(value, decimals=decimals, locale=locale, style='percent')


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    parsed = pd.to_datetime(value, errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def format_date(value: Any, locale: Optional[str] = None, format: str = 'long',
                include_time: bool = False) -> str:
    """
    Format a date for display.

    'short' gives numeric months (``15/01/2024``); 'medium', 'long' and
    'full' spell the month (``15 janvier 2024``). No timezone conversion
    is applied.

    Returns:
        Formatted string, "N/A" for empty input, "Invalid Date" when the
        value cannot be parsed
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return NOT_AVAILABLE

    try:
        moment = _to_datetime(value)
    except (TypeError, ValueError, OverflowError) as e:
        logger.error(f"Error formatting date {value!r}: {e}")
        return INVALID_DATE
    if moment is None:
        return INVALID_DATE

    locale = _locale(locale)
    months = LOCALES[locale]['months']

    if locale == 'fr-FR':
        if format == 'short':
            text = f"{moment.day:02d}/{moment.month:02d}/{moment.year}"
            time_sep = " "
        else:
            text = f"{moment.day} {months[moment.month - 1]} {moment.year}"
            time_sep = " à "
        if include_time:
            text += f"{time_sep}{moment.hour:02d}:{moment.minute:02d}"
        return text

    if format == 'short':
        text = f"{moment.month}/{moment.day}/{moment.year}"
        time_sep = ", "
    else:
        text = f"{months[moment.month - 1]} {moment.day}, {moment.year}"
        time_sep = " at "
    if include_time:
        hour = moment.hour % 12 or 12
        suffix = "AM" if moment.hour < 12 else "PM"
        text += f"{time_sep}{hour:02d}:{moment.minute:02d} {suffix}"
    return text


def format_precise_number(value: Any, precision: int = 6, max_decimals: int = 6,
                          min_decimals: int = 0) -> str:
    """
    Format a number for scientific/technical display (regression
    coefficients, R², MSE).

    Values closer to zero than 10^-precision print as zero; values larger
    than 10^precision switch to scientific notation. Otherwise trailing
    zeros are dropped, keeping at least ``min_decimals`` decimals.
    """
    if _is_missing(value):
        return NOT_AVAILABLE

    value = float(value)
    if abs(value) < 10 ** -precision:
        return "0" if min_decimals <= 0 else "0." + "0" * min_decimals

    if abs(value) > 10 ** precision:
        return f"{value:.{max_decimals}e}"

    text = f"{value:.{max_decimals}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')

    if min_decimals > 0:
        whole, _, fraction = text.partition('.')
        text = f"{whole}.{fraction.ljust(min_decimals, '0')}"
    return text


def format_file_size(size_bytes: Any) -> str:
    """Format a byte count with 1024-based units: 1536 -> ``1.5 KB``."""
    if _is_missing(size_bytes) or size_bytes < 0 or math.isinf(size_bytes):
        return NOT_AVAILABLE
    if size_bytes == 0:
        return "0 Bytes"

    index = 0
    while size_bytes >= 1024 ** (index + 1) and index < len(FILE_SIZE_UNITS) - 1:
        index += 1

    scaled = f"{size_bytes / 1024 ** index:.2f}".rstrip('0').rstrip('.')
    return f"{scaled} {FILE_SIZE_UNITS[index]}"
