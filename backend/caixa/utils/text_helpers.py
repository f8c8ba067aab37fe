"""Text folding shared by every description classifier."""
import unicodedata
from typing import Optional


def normalize(text: Optional[str]) -> str:
    """
    Lower-case text and strip diacritics.

    Examples:
        >>> normalize("Transferência RECEBIDA")
        'transferencia recebida'
        >>> normalize(None)
        ''
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def contains_any(text: str, patterns) -> bool:
    """True if normalized text contains any normalized pattern as a substring."""
    folded = normalize(text)
    for pattern in patterns:
        needle = normalize(pattern)
        if needle and needle in folded:
            return True
    return False
