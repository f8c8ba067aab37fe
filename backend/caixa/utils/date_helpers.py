"""Date parsing and month-label utilities."""
from datetime import date
from typing import Optional

from caixa.utils.text_helpers import normalize

# pt-BR month names, index 0 = January
MONTH_NAMES = (
    'janeiro',
    'fevereiro',
    'março',
    'abril',
    'maio',
    'junho',
    'julho',
    'agosto',
    'setembro',
    'outubro',
    'novembro',
    'dezembro',
)

# Folded name -> month number ("marco" and "março" both map to 3)
MONTH_MAP = {normalize(name): number for number, name in enumerate(MONTH_NAMES, start=1)}


def month_key(d: date) -> str:
    """
    Canonical month label used to group transactions and planned expenses.

    Examples:
        >>> month_key(date(2024, 1, 10))
        'janeiro 2024'
        >>> month_key(date(2024, 3, 31))
        'março 2024'
    """
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


def months_match(a: Optional[str], b: Optional[str]) -> bool:
    """
    Case-insensitive exact comparison of two month labels.

    No trimming or locale coercion: "janeiro de 2024" does not match
    "janeiro 2024". Stored labels must use the month_key() form.
    """
    if a is None or b is None:
        return False
    return a.casefold() == b.casefold()


def parse_month_key(label: Optional[str]) -> Optional[date]:
    """
    Inverse of month_key(): first day of the labelled month, or None.

    Used for ordering only, so it is lenient on case and accents.

    Examples:
        >>> parse_month_key('Março 2024')
        datetime.date(2024, 3, 1)
        >>> parse_month_key('sometime')
    """
    if not label:
        return None

    parts = label.split()
    if len(parts) != 2:
        return None

    month = MONTH_MAP.get(normalize(parts[0]))
    if not month or not parts[1].isdigit():
        return None

    return date(int(parts[1]), month, 1)


def parse_br_date(date_str: str) -> date:
    """
    Convert a DD/MM/YYYY statement date to a date object.

    Examples:
        >>> parse_br_date('05/03/2024')
        datetime.date(2024, 3, 5)

    Raises:
        ValueError: If date_str is empty, lacks separators or is not a real date
    """
    # Early validation
    if not date_str or '/' not in date_str:
        raise ValueError(f"Invalid date format: {date_str!r}")

    parts = [p.strip() for p in date_str.strip().split('/')]
    if len(parts) != 3 or not all(parts) or len(parts[2]) != 4:
        raise ValueError(f"Invalid date format: {date_str!r}")

    try:
        day, month, year = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid date format {date_str!r}: {e}")
