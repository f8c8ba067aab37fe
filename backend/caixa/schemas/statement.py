from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List

from caixa.schemas.transactions import Transaction


class ParserResult(BaseModel):
    """
    Candidates parsed from a bank statement file (output).

    Rows whose date could not be read keep date=None and get a warning,
    so the caller can show them instead of importing them blindly.
    """
    transactions: List[Transaction] = []
    warnings: List[str] = []

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "transactions": [
                    {"date": "2024-03-05", "value": 150.50, "type": "saida", "description": "MERCADO X"}
                ],
                "warnings": ["Linha 4: data inválida '2024/03'"]
            }
        }
    )
