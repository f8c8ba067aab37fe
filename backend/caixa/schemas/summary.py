from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional
from decimal import Decimal

from caixa.schemas.expenses import PlannedExpense
from caixa.schemas.transactions import Transaction


class CalculationDetails(BaseModel):
    """Trace of how saldo_final was reached"""
    formula: str
    salario: Decimal
    outras_entradas: Decimal
    entradas: Decimal
    saidas: Decimal
    despesas_forms: Decimal
    equacao: str     # "(5000.00 + 0.00) - 1200.00 - 0.00 = 3800.00"
    resultado: str   # "R$ 3.800,00"

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidationReport(BaseModel):
    """Consistency check result. Advisory only, never blocks a summary."""
    is_valid: bool
    warnings: List[str] = []
    errors: List[str] = []

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "isValid": True,
                "warnings": ["Transação #3 (2024-01-20): valor ausente ou não numérico"],
                "errors": []
            }
        }
    )


class MonthSummary(BaseModel):
    """
    Derived totals for one month, or for every month when month is None.

    Invariants:
    - total_entradas = salario + outras_entradas
    - saldo_final = total_entradas - total_saidas - total_despesas_forms
    """
    month: Optional[str] = None
    total_entradas: Decimal = Decimal("0")
    outras_entradas: Decimal = Decimal("0")
    total_saidas: Decimal = Decimal("0")
    total_despesas_forms: Decimal = Decimal("0")
    salario: Decimal = Decimal("0")             # Effective salary (detected or manual)
    salario_detectado: Decimal = Decimal("0")
    saldo_final: Decimal = Decimal("0")
    detalhes_calculo: CalculationDetails

    # Counters
    transaction_count: int = 0
    ignored_count: int = 0

    # Counted saídas per category reference
    category_totals: Dict[str, Decimal] = {}

    validation: Optional[ValidationReport] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "month": "janeiro 2024",
                "totalEntradas": 5000.00,
                "outrasEntradas": 0.00,
                "totalSaidas": 1200.00,
                "totalDespesasForms": 0.00,
                "salario": 5000.00,
                "salarioDetectado": 5000.00,
                "saldoFinal": 3800.00,
                "detalhesCalculo": {
                    "formula": "saldoFinal = (salario + outrasEntradas) - totalSaidas - totalDespesasForms",
                    "salario": 5000.00,
                    "outrasEntradas": 0.00,
                    "entradas": 5000.00,
                    "saidas": 1200.00,
                    "despesasForms": 0.00,
                    "equacao": "(5000.00 + 0.00) - 1200.00 - 0.00 = 3800.00",
                    "resultado": "R$ 3.800,00"
                },
                "transactionCount": 2,
                "ignoredCount": 0,
                "categoryTotals": {},
                "validation": None
            }
        }
    )


class SummaryReport(BaseModel):
    """Global summary plus one summary per month, most recent month first (output)"""
    global_summary: MonthSummary
    monthly: List[MonthSummary] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummaryRequest(BaseModel):
    """Everything the engine needs to build summaries (input)"""
    transactions: List[Transaction] = []
    planned_expenses: List[PlannedExpense] = []
    manual_salary: Decimal = Decimal("0")
    month: Optional[str] = Field(default=None, description='Month label, e.g. "janeiro 2024"')
    include_validation: bool = False

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "transactions": [
                    {"date": "2024-01-10", "value": 5000, "type": "entrada",
                     "description": "TRANSFERENCIA RECEBIDA OTAVIO LOPES"},
                    {"date": "2024-01-15", "value": 1200, "type": "saida",
                     "description": "PAGAMENTO CARTAO"}
                ],
                "plannedExpenses": [],
                "manualSalary": 0,
                "month": "janeiro 2024",
                "includeValidation": True
            }
        }
    )
