"""
Month Calendar Module

French month labels as they appear in the fleet spreadsheets, and the
calendar ordering every monthly series is sorted with.

Functions:
- month_index: Calendar position of a full or abbreviated month label
- sort_by_month: Stable calendar sort of records or aggregates
- get_french_month_name: Month number to French label
"""

import logging
import unicodedata
from typing import Any, Callable, Iterable, List, Optional

# Configure logging
logger = logging.getLogger(__name__)

FRENCH_MONTHS = (
    'Janvier', 'Février', 'Mars', 'Avril', 'Mai', 'Juin',
    'Juillet', 'Août', 'Septembre', 'Octobre', 'Novembre', 'Décembre'
)

# Abbreviations used by the SER tables ("Juin"/"Juil" need 4 letters)
FRENCH_MONTH_ABBREVIATIONS = (
    'Jan', 'Fév', 'Mar', 'Avr', 'Mai', 'Juin',
    'Juil', 'Août', 'Sep', 'Oct', 'Nov', 'Déc'
)

# Sort position for labels outside the calendar ("Unknown", typos)
UNKNOWN_MONTH_INDEX = len(FRENCH_MONTHS)


def _normalize(label: str) -> str:
    decomposed = unicodedata.normalize('NFKD', label.strip().lower())
    return ''.join(c for c in decomposed if not unicodedata.combining(c))


_FULL_NAMES = {_normalize(name): i for i, name in enumerate(FRENCH_MONTHS)}
_ABBREVIATIONS = {_normalize(abbr): i for i, abbr in enumerate(FRENCH_MONTH_ABBREVIATIONS)}


def month_index(label: Optional[str]) -> int:
    """
    Return the 0-based calendar position of a French month label.

    Full names and the SER table abbreviations are accepted regardless of
    case and accents ("fevrier", "FÉV", "Juil."). Anything else sorts after
    December.
    """
    if not label or not isinstance(label, str):
        return UNKNOWN_MONTH_INDEX

    key = _normalize(label).rstrip('.')
    if key in _FULL_NAMES:
        return _FULL_NAMES[key]
    if key in _ABBREVIATIONS:
        return _ABBREVIATIONS[key]

    # "Juil 2024", "Janv" ...
    for abbr, index in sorted(_ABBREVIATIONS.items(), key=lambda item: -len(item[0])):
        if key.startswith(abbr):
            return index

    return UNKNOWN_MONTH_INDEX


def _default_month_key(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        return item.get('month', item.get('mois'))
    return getattr(item, 'month', getattr(item, 'mois', None))


def sort_by_month(items: Iterable[Any], key: Optional[Callable[[Any], Optional[str]]] = None,
                  reverse: bool = False) -> List[Any]:
    """
    Sort items in calendar order.

    Args:
        items: Dicts or models carrying a ``month`` (or ``mois``) label
        key: Optional callable returning the month label of an item
        reverse: December first when True

    Returns:
        New list; items with the same month keep their input order
    """
    get_label = key or _default_month_key
    ordered = sorted(items, key=lambda item: month_index(get_label(item)))
    if reverse:
        # Keep unknown labels at the end in both directions
        known = [item for item in ordered if month_index(get_label(item)) != UNKNOWN_MONTH_INDEX]
        unknown = ordered[len(known):]
        ordered = sorted(known, key=lambda item: month_index(get_label(item)), reverse=True) + unknown
    return ordered


def get_french_month_name(month_number: int) -> str:
    """Return the French name of month 1-12, or an empty string."""
    if not isinstance(month_number, int) or not 1 <= month_number <= 12:
        return ""
    return FRENCH_MONTHS[month_number - 1]
