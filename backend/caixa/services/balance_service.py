"""
caixa/services/balance_service.py

Balance formula: the single place where saldo_final is computed.

    saldo_final = (salario + outras_entradas) - total_saidas - total_despesas_forms

Planned expenses (despesas forms) are subtracted as if already spent.
"""

from decimal import Decimal

from caixa.schemas.summary import CalculationDetails
from caixa.utils.number_helpers import format_brl, quantize_cents


FORMULA = "saldoFinal = (salario + outrasEntradas) - totalSaidas - totalDespesasForms"


def compute_saldo_final(
    salario_efetivo: Decimal,
    outras_entradas: Decimal,
    total_saidas: Decimal,
    total_despesas_forms: Decimal,
) -> Decimal:
    return (salario_efetivo + outras_entradas) - total_saidas - total_despesas_forms


def build_calculation_details(
    salario_efetivo: Decimal,
    outras_entradas: Decimal,
    total_saidas: Decimal,
    total_despesas_forms: Decimal,
) -> CalculationDetails:
    """Trace with every operand plus a readable equation for auditing."""
    saldo_final = compute_saldo_final(
        salario_efetivo, outras_entradas, total_saidas, total_despesas_forms
    )

    def q(v: Decimal) -> Decimal:
        return quantize_cents(v)

    equacao = (
        f"({q(salario_efetivo)} + {q(outras_entradas)}) - {q(total_saidas)} "
        f"- {q(total_despesas_forms)} = {q(saldo_final)}"
    )

    return CalculationDetails(
        formula=FORMULA,
        salario=salario_efetivo,
        outras_entradas=outras_entradas,
        entradas=salario_efetivo + outras_entradas,
        saidas=total_saidas,
        despesas_forms=total_despesas_forms,
        equacao=equacao,
        resultado=format_brl(saldo_final),
    )
