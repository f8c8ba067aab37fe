"""
caixa/services/import_service.py

Duplicate detection for manual inserts and statement imports.

Design choices:
- Classification only: this module decides new vs duplicate, the store
  performs (or skips) the writes
- A batch is checked against ONE snapshot of existing records; records
  accepted earlier in the same batch join the snapshot, so a statement
  that repeats a row keeps a single copy
- Check-then-insert is racy when two imports of the same statement run at
  once. The store must enforce uniqueness on duplicate_key() (or serialize
  import sessions); nothing here locks.
"""

import logging
from typing import List, Sequence

from caixa.schemas.transactions import ImportPartition, Transaction
from caixa.utils.hash_helpers import duplicate_key

logger = logging.getLogger(__name__)


def is_duplicate(candidate: Transaction, existing: Sequence[Transaction]) -> bool:
    """
    True when an existing record has the same date, value, type and
    description (case-insensitive equality).
    """
    key = duplicate_key(candidate)
    return any(duplicate_key(tx) == key for tx in existing)


def partition_import(
    candidates: Sequence[Transaction],
    existing: Sequence[Transaction],
) -> ImportPartition:
    """
    Split an import batch into records to insert and records already present.

    Returns:
        ImportPartition where len(new) + len(duplicates) == len(candidates)
    """
    seen = {duplicate_key(tx) for tx in existing}
    new: List[Transaction] = []
    duplicates: List[Transaction] = []

    for candidate in candidates:
        key = duplicate_key(candidate)
        if key in seen:
            duplicates.append(candidate)
        else:
            new.append(candidate)
            seen.add(key)

    logger.info(
        "Import partition: %d candidates, %d new, %d duplicates (against %d existing)",
        len(candidates),
        len(new),
        len(duplicates),
        len(existing),
    )
    return ImportPartition(new=new, duplicates=duplicates)
