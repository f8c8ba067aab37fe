"""Transaction hashing utilities for deduplication."""
import hashlib

from caixa.schemas.transactions import Transaction
from caixa.utils.number_helpers import canonical_amount


def duplicate_key(tx: Transaction) -> str:
    """
    Compute SHA256 key identifying "the same" movement.

    Two records are the same transaction when they share:
    - date (ISO, empty when missing)
    - value (exact, trailing zeros ignored: 100 == 100.00 != 100.004)
    - type
    - description (stripped, case-insensitive equality, not substring)

    The store can put a unique constraint on this key; that constraint,
    not the check in import_service, is what makes concurrent imports safe.

    Returns:
        64-character hex string (SHA256)
    """
    date_str = tx.date.isoformat() if tx.date else ""
    value_str = canonical_amount(tx.value) if tx.value is not None else ""
    type_str = tx.type or ""
    description_norm = (tx.description or "").strip().casefold()

    # Format: YYYY-MM-DD|amount|type|description
    hash_input = f"{date_str}|{value_str}|{type_str}|{description_norm}"

    return hashlib.sha256(hash_input.encode("utf-8")).hexdigest()
