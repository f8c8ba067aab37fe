# caixa/services/statement_service.py

import logging
import os
import re

from fastapi import UploadFile, HTTPException

from caixa.core.config import settings
from caixa.schemas.statement import ParserResult
from caixa.utils.statement_parser import StatementParseError, parse_statement_file

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".csv", ".txt")


# -------------------------
# Upload helpers
# -------------------------

def sanitize_filename(filename: str) -> str:
    """Return a safe filename for logs (remove path + dangerous chars)."""
    safe = os.path.basename(filename or "")
    return re.sub(r"[^a-zA-Z0-9._-]", "_", safe) or "extrato.csv"


def read_upload(file: UploadFile) -> bytes:
    """Validate the uploaded statement and return its raw bytes."""
    if not file.filename or not file.filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed")

    content = file.file.read()
    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE_MB}MB",
        )

    return content


# -------------------------
# Parsing pipeline
# -------------------------

def process_statement_upload(file: UploadFile) -> ParserResult:
    """Read an uploaded statement and turn it into transaction candidates."""
    content = read_upload(file)
    name = sanitize_filename(file.filename)

    try:
        result = parse_statement_file(content)
    except StatementParseError as e:
        logger.warning("Statement %s rejected: %s", name, e)
        raise HTTPException(status_code=400, detail=f"Falha ao ler extrato: {e}")

    logger.info("Statement %s parsed: %d candidates", name, len(result.transactions))
    return result
