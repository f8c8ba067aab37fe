from fastapi import APIRouter, File, UploadFile

from caixa.core.config import settings
from caixa.schemas.statement import ParserResult
from caixa.services import statement_service

router = APIRouter(prefix=f"{settings.API_PREFIX}/statements", tags=["Statements"])


@router.post("/parse", response_model=ParserResult)
def parse_statement(
    file: UploadFile = File(..., description="CSV statement file (Data, Valor, Descrição)"),
):
    """
    Parse a bank statement CSV into transaction candidates.

    Process:
    1. Validate extension and size
    2. Read rows (delimiter detected from the header)
    3. Convert dates to ISO, value sign to entrada/saida

    Note: nothing is stored. Send the candidates to POST /transactions/import
    to drop re-imported rows. A row with an unreadable value rejects the
    whole file (400).
    """
    return statement_service.process_statement_upload(file)
