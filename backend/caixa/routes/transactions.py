from fastapi import APIRouter, HTTPException, status

from caixa.core.config import settings
from caixa.schemas.transactions import (
    DuplicateCheckRequest,
    ImportPartition,
    ImportRequest,
    Transaction,
)
from caixa.services.import_service import is_duplicate, partition_import


router = APIRouter(prefix=f"{settings.API_PREFIX}/transactions", tags=["Transactions"])


@router.post("/check-duplicate", response_model=Transaction)
def check_duplicate(request: DuplicateCheckRequest) -> Transaction:
    """
    Check a manual entry before it is inserted.

    The candidate must have a date, a positive value and type entrada|saida.
    Returns the normalized candidate, or 409 when the same transaction
    (date, value, type, description ignoring case) is already registered.
    """
    candidate = request.candidate.to_transaction()

    if is_duplicate(candidate, request.existing):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Esta transação já foi registrada",
        )

    return candidate


@router.post("/import", response_model=ImportPartition)
def import_transactions(request: ImportRequest) -> ImportPartition:
    """
    Partition an import batch into new records and duplicates.

    Use case:
    - Call with the candidates from POST /statements/parse and one snapshot
      of the user's stored transactions
    - Insert only "new"; show len(duplicates) to the user

    Note: the store should still enforce uniqueness; two concurrent imports
    of the same file can both see "not present".
    """
    return partition_import(request.candidates, request.existing)
