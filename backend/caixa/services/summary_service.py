"""
caixa/services/summary_service.py

Monthly aggregation:
- Filter transactions / planned expenses to a month (or take everything)
- Split counted entradas into detected salary vs other income
- Sum counted saídas and planned expense totals
- Derive saldo_final through balance_service

Design choices:
- Pure functions over in-memory lists; nothing is written anywhere
- The caller passes the ScopeContext explicitly (scope_for(month) is the
  usual choice), the aggregator never guesses it
- Malformed records never raise: untyped transactions are skipped, missing
  values count as 0. validation_service reports them.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from caixa.schemas.expenses import PlannedExpense
from caixa.schemas.summary import MonthSummary, SummaryReport
from caixa.schemas.transactions import ScopeContext, Transaction, TransactionType, scope_for
from caixa.services.balance_service import build_calculation_details, compute_saldo_final
from caixa.utils.classifiers import ClassificationRules, default_rules, is_ignorable, is_salary
from caixa.utils.date_helpers import month_key, months_match, parse_month_key
from caixa.utils.number_helpers import to_decimal

logger = logging.getLogger(__name__)


def filter_transactions_by_month(
    transactions: Sequence[Transaction], month: Optional[str]
) -> List[Transaction]:
    """Transactions whose month_key equals month; all of them when month is None."""
    if not month:
        return list(transactions)
    return [tx for tx in transactions if tx.date is not None and months_match(month_key(tx.date), month)]


def filter_expenses_by_month(
    planned_expenses: Sequence[PlannedExpense], month: Optional[str]
) -> List[PlannedExpense]:
    if not month:
        return list(planned_expenses)
    return [e for e in planned_expenses if months_match(e.month, month)]


def aggregate(
    transactions: Sequence[Transaction],
    planned_expenses: Sequence[PlannedExpense],
    manual_salary: Any,
    month: Optional[str] = None,
    *,
    scope: ScopeContext,
    rules: Optional[ClassificationRules] = None,
) -> MonthSummary:
    """
    Build the MonthSummary for one month, or for every month when month is None.

    Effective salary is the detected payroll sum when positive, otherwise the
    manual_salary estimate. Detected deposits always win over the estimate.

    Args:
        transactions: Transactions of one user (any months)
        planned_expenses: Planned expenses of one user (any months)
        manual_salary: Manually entered salary estimate (None counts as 0)
        month: Month label as produced by month_key(), e.g. "janeiro 2024"
        scope: Ignore-pattern set to apply (GLOBAL for the all-months view)
        rules: Keyword tables; defaults to settings

    Returns:
        MonthSummary with the calculation trace. Empty input gives all zeros.
    """
    rules = rules or default_rules()
    manual = to_decimal(manual_salary)

    scoped = filter_transactions_by_month(transactions, month)

    salario_detectado = Decimal("0")
    outras_entradas = Decimal("0")
    total_saidas = Decimal("0")
    ignored = 0
    category_totals: Dict[str, Decimal] = {}

    for tx in scoped:
        kind = tx.kind
        if kind is None:
            # Untyped: can't tell direction, leave out of both sums
            continue

        if is_ignorable(tx.description, scope, rules):
            ignored += 1
            continue

        if kind is TransactionType.ENTRADA:
            if is_salary(tx.description, rules):
                salario_detectado += tx.amount
            else:
                outras_entradas += tx.amount
        else:
            total_saidas += tx.amount
            if tx.category_ref is not None:
                key = str(tx.category_ref)
                category_totals[key] = category_totals.get(key, Decimal("0")) + tx.amount

    total_despesas_forms = sum(
        (e.derived_total for e in filter_expenses_by_month(planned_expenses, month)),
        Decimal("0"),
    )

    salario = salario_detectado if salario_detectado > 0 else manual

    return MonthSummary(
        month=month,
        total_entradas=salario + outras_entradas,
        outras_entradas=outras_entradas,
        total_saidas=total_saidas,
        total_despesas_forms=total_despesas_forms,
        salario=salario,
        salario_detectado=salario_detectado,
        saldo_final=compute_saldo_final(salario, outras_entradas, total_saidas, total_despesas_forms),
        detalhes_calculo=build_calculation_details(
            salario, outras_entradas, total_saidas, total_despesas_forms
        ),
        transaction_count=len(scoped),
        ignored_count=ignored,
        category_totals=category_totals,
    )


def collect_month_keys(
    transactions: Sequence[Transaction], planned_expenses: Sequence[PlannedExpense]
) -> List[str]:
    """
    Distinct month labels present in the input, most recent first.

    Labels are deduplicated case-insensitively; keys derived from transaction
    dates win over the spelling stored on planned expenses. Labels that
    parse_month_key() can't read go last.
    """
    labels: Dict[str, str] = {}
    for tx in transactions:
        if tx.date is not None:
            key = month_key(tx.date)
            labels.setdefault(key.casefold(), key)
    for expense in planned_expenses:
        if expense.month:
            labels.setdefault(expense.month.casefold(), expense.month)

    def sort_key(label: str):
        parsed = parse_month_key(label)
        return (parsed is not None, parsed or date.min)

    return sorted(labels.values(), key=sort_key, reverse=True)


def build_summaries(
    transactions: Sequence[Transaction],
    planned_expenses: Sequence[PlannedExpense],
    manual_salary: Any,
    *,
    month: Optional[str] = None,
    include_validation: bool = False,
    rules: Optional[ClassificationRules] = None,
) -> SummaryReport:
    """
    Global summary plus one summary per month.

    Each month uses the monthly ignore set and the all-months summary the
    global one. With month given, only that month is listed.
    """
    # Imported here to avoid a cycle (validation_service builds on aggregate)
    from caixa.services.validation_service import validate_summary

    rules = rules or default_rules()
    keys = [month] if month else collect_month_keys(transactions, planned_expenses)

    def summarize(label: Optional[str]) -> MonthSummary:
        scope = scope_for(label)
        summary = aggregate(transactions, planned_expenses, manual_salary, label, scope=scope, rules=rules)
        if include_validation:
            report = validate_summary(
                transactions,
                planned_expenses,
                manual_salary,
                label,
                scope=scope,
                rules=rules,
                summary=summary,
            )
            summary = summary.model_copy(update={"validation": report})
        return summary

    report = SummaryReport(
        global_summary=summarize(None),
        monthly=[summarize(label) for label in keys],
    )

    logger.info(
        "Built summaries: %d transactions, %d planned expenses, %d months",
        len(transactions),
        len(planned_expenses),
        len(report.monthly),
    )
    return report
