import csv
import io
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from caixa.schemas.statement import ParserResult
from caixa.schemas.transactions import Transaction, TransactionType
from caixa.utils.date_helpers import parse_br_date
from caixa.utils.number_helpers import parse_br_amount
from caixa.utils.text_helpers import normalize

logger = logging.getLogger(__name__)

# Accepted header names, compared after normalize()
DATE_COLUMNS = ("data", "date", "data lancamento", "data do lancamento")
VALUE_COLUMNS = ("valor", "value", "amount")
DESCRIPTION_COLUMNS = ("descricao", "description", "historico", "lancamento", "identificacao")

ENCODINGS = ("utf-8-sig", "latin-1")


class StatementParseError(ValueError):
    """The statement file can't be trusted as a whole; nothing should be imported."""


def _pick(row: Mapping[str, Any], names: Iterable[str]) -> Optional[str]:
    """First non-empty cell among the accepted header variants."""
    for name in names:
        value = row.get(name)
        if value is not None and str(value).strip() != "":
            return str(value)
    return None


def parse_statement_rows(rows: Iterable[Mapping[str, Any]]) -> ParserResult:
    """
    Convert tabular statement rows into transaction candidates.

    Rules:
    - Date DD/MM/YYYY becomes an ISO date; unreadable dates stay None and
      produce a warning instead of being guessed
    - Value sign sets the type (>= 0 entrada, < 0 saida); stored value is
      the absolute amount
    - Description comes from any known header variant

    Args:
        rows: Dicts keyed by the file's header names

    Returns:
        ParserResult with candidates and per-row warnings

    Raises:
        StatementParseError: If any row has a missing or non-numeric value.
            The whole file fails so corrupted rows are never imported.
    """
    transactions: List[Transaction] = []
    warnings: List[str] = []

    # Line 1 is the header
    for line_no, row in enumerate(rows, start=2):
        cells = {normalize(str(k)).strip(): v for k, v in row.items() if k is not None}

        raw_value = _pick(cells, VALUE_COLUMNS)
        try:
            amount = parse_br_amount(raw_value)
        except ValueError as e:
            raise StatementParseError(f"Linha {line_no}: valor inválido ({e})") from e

        raw_date = _pick(cells, DATE_COLUMNS)
        try:
            tx_date = parse_br_date(raw_date or "")
        except ValueError:
            tx_date = None
            warnings.append(f"Linha {line_no}: data inválida {raw_date!r}")

        tx_type = TransactionType.ENTRADA if amount >= 0 else TransactionType.SAIDA

        transactions.append(
            Transaction(
                date=tx_date,
                value=abs(amount),
                type=tx_type,
                description=(_pick(cells, DESCRIPTION_COLUMNS) or "").strip(),
            )
        )

    return ParserResult(transactions=transactions, warnings=warnings)


def read_statement_rows(content: bytes) -> List[Dict[str, str]]:
    """
    Read a delimited statement file into row dicts.

    Delimiter is sniffed from the header line (comma, semicolon, tab).
    Every cell is read as text; numbers are parsed later with pt-BR rules.

    Raises:
        StatementParseError: If the file is empty or not a delimited table
    """
    if not content or not content.strip():
        raise StatementParseError("Arquivo vazio")

    for encoding in ENCODINGS:
        try:
            df = pd.read_csv(
                io.BytesIO(content),
                sep=None,
                engine="python",
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding=encoding,
            )
        except UnicodeDecodeError:
            logger.debug("Statement is not %s, trying next encoding", encoding)
            continue
        except (pd.errors.ParserError, pd.errors.EmptyDataError, csv.Error) as e:
            raise StatementParseError(f"Arquivo ilegível: {e}") from e

        # Short rows come back as NaN even with dtype=str
        return df.fillna("").to_dict(orient="records")

    raise StatementParseError("Codificação do arquivo não suportada")


def parse_statement_file(content: bytes) -> ParserResult:
    """Orchestrate read + parse for an uploaded statement file."""
    rows = read_statement_rows(content)
    result = parse_statement_rows(rows)

    logger.info(
        "Parsed statement: %d rows, %d candidates, %d warnings",
        len(rows),
        len(result.transactions),
        len(result.warnings),
    )
    return result
