"""
Display helpers for amount columns.

Column classification here is deliberately looser than the resolution done at
ingestion: any header containing the configured amount name is rendered as
currency, not just the designated amount column.
"""
import math
from typing import Dict, Sequence, Union

from babel.numbers import format_currency as babel_format_currency

from .config import Settings
from .models import Row


def is_amount_like(header: str, settings: Settings) -> bool:
    """Return True if the header names an amount-like column."""
    return settings.amount_column in header.lower()


def format_currency(value: Union[int, float], settings: Settings) -> str:
    """
    Render a number as a localized currency string.

    Args:
        value: A finite amount
        settings: Supplies the locale and currency code

    Returns:
        The formatted amount, e.g. "$1,234.50" for en_US/USD
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite amount: {value!r}")
    return babel_format_currency(value, settings.currency, locale=settings.locale)


def display_row(row: Row, headers: Sequence[str], settings: Settings) -> Dict[str, str]:
    """Render a row for display, formatting numbers in amount-like columns."""
    rendered = {}
    for header in headers:
        value = row.get(header, "")
        if (
            is_amount_like(header, settings)
            and isinstance(value, (int, float))
            and math.isfinite(value)
        ):
            rendered[header] = format_currency(value, settings)
        else:
            rendered[header] = str(value)
    return rendered
