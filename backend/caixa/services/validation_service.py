"""
caixa/services/validation_service.py

Consistency checks over one summary scope. Advisory: the summary is built
and returned whatever this module finds.
"""

import logging
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from caixa.core.config import settings
from caixa.schemas.expenses import PlannedExpense
from caixa.schemas.summary import MonthSummary, ValidationReport
from caixa.schemas.transactions import ScopeContext, Transaction, TransactionType
from caixa.services.summary_service import (
    aggregate,
    filter_expenses_by_month,
    filter_transactions_by_month,
)
from caixa.utils.classifiers import ClassificationRules, default_rules, is_ignorable, is_salary
from caixa.utils.number_helpers import to_decimal

logger = logging.getLogger(__name__)


def _label(tx: Transaction, index: int) -> str:
    ref = tx.id if tx.id is not None else index
    when = tx.date.isoformat() if tx.date else "sem data"
    return f"Transação #{ref} ({when})"


def recompute_saldo(
    scoped: Sequence[Transaction],
    summary: MonthSummary,
    scope: ScopeContext,
    rules: ClassificationRules,
) -> Decimal:
    """
    Second, independent route to saldo_final.

    Walks the transactions once as a signed cash flow, then applies the
    manual salary adjustment (effective minus detected salary, zero whenever
    payroll was detected) and the planned expenses:

        (entradas - saidas) + (salario - salario_detectado) - despesas_forms

    Not the shorter (totalEntradas - totalSaidas) - (manualSalary -
    totalDespesasForms): that one only equals saldo_final when manualSalary
    is twice totalDespesasForms, so it would reject correct summaries.
    """
    entradas = Decimal("0")
    saidas = Decimal("0")
    detectado = Decimal("0")

    for tx in scoped:
        if tx.kind is None or is_ignorable(tx.description, scope, rules):
            continue
        if tx.kind is TransactionType.ENTRADA:
            entradas += tx.amount
            if is_salary(tx.description, rules):
                detectado += tx.amount
        else:
            saidas += tx.amount

    ajuste_salario = summary.salario - detectado
    return (entradas - saidas) + ajuste_salario - summary.total_despesas_forms


def validate_summary(
    transactions: Sequence[Transaction],
    planned_expenses: Sequence[PlannedExpense],
    manual_salary: Any,
    month: Optional[str] = None,
    *,
    scope: ScopeContext,
    rules: Optional[ClassificationRules] = None,
    summary: Optional[MonthSummary] = None,
) -> ValidationReport:
    """
    Validate data quality and formula consistency for one scope.

    Errors (is_valid=False):
    - primary and recomputed saldo_final differ by more than BALANCE_TOLERANCE

    Warnings:
    - transaction value missing, non-numeric or not positive
    - transaction type missing or not entrada/saida
    - transaction without a usable date (only visible in the global scope)
    - planned expense whose derived total is not positive
    - detected salary replacing a different manual salary
    - negative saldo_final

    Args:
        summary: Already computed summary for the same inputs; computed
            here when omitted
    """
    rules = rules or default_rules()
    manual = to_decimal(manual_salary)
    if summary is None:
        summary = aggregate(transactions, planned_expenses, manual, month, scope=scope, rules=rules)

    warnings: List[str] = []
    errors: List[str] = []

    scoped = filter_transactions_by_month(transactions, month)

    # Data quality
    for index, tx in enumerate(scoped, start=1):
        label = _label(tx, index)
        if tx.value is None:
            warnings.append(f"{label}: valor ausente ou não numérico")
        elif tx.value <= 0:
            warnings.append(f"{label}: valor não positivo ({tx.value})")

        if tx.kind is None:
            warnings.append(f"{label}: tipo inválido ou ausente ({tx.type!r})")

        if tx.date is None:
            warnings.append(f"{label}: data ausente ou inválida")

    for expense in filter_expenses_by_month(planned_expenses, month):
        if expense.derived_total <= 0:
            warnings.append(
                f"Gasto planejado '{expense.name or expense.id}' ({expense.month}): "
                f"total não positivo ({expense.derived_total})"
            )

    # Anomalies
    if summary.salario_detectado > 0 and manual > 0 and summary.salario_detectado != manual:
        warnings.append(
            f"Salário detectado ({summary.salario_detectado}) substitui o salário manual ({manual})"
        )

    if summary.saldo_final < 0:
        warnings.append(f"Saldo final negativo ({summary.saldo_final})")

    # Formula consistency
    alternate = recompute_saldo(scoped, summary, scope, rules)
    difference = summary.saldo_final - alternate
    if abs(difference) > settings.BALANCE_TOLERANCE:
        errors.append(
            f"Saldo final inconsistente: fórmula principal {summary.saldo_final:.2f}, "
            f"recalculado {alternate:.2f} (diff: {difference:+.2f})"
        )

    is_valid = len(errors) == 0
    if not is_valid:
        logger.warning("Validation failed for %s: %s", month or "todos os meses", "; ".join(errors))

    return ValidationReport(is_valid=is_valid, warnings=warnings, errors=errors)
