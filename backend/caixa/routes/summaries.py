from fastapi import APIRouter

from caixa.core.config import settings
from caixa.schemas.summary import SummaryReport, SummaryRequest, ValidationReport
from caixa.schemas.transactions import scope_for
from caixa.services.summary_service import build_summaries
from caixa.services.validation_service import validate_summary


router = APIRouter(prefix=f"{settings.API_PREFIX}/summaries", tags=["Summaries"])


@router.post("", response_model=SummaryReport)
def create_summaries(request: SummaryRequest) -> SummaryReport:
    """
    Build monthly and global summaries from the user's records.

    Body:
    - transactions: transactions of the user (store read)
    - plannedExpenses: planned monthly expenses of the user
    - manualSalary: salary estimate used when no payroll deposit is detected
    - month: optional month label ("janeiro 2024"); limits the monthly list
    - includeValidation: attach a validation report to every summary

    Returns:
    - globalSummary: all months, global ignore set (bill payments excluded)
    - monthly: one summary per month, most recent first, monthly ignore set

    Notes:
    - saldoFinal = (salario + outrasEntradas) - totalSaidas - totalDespesasForms
    - Malformed records never fail the request; ask for validation to see them
    """
    return build_summaries(
        request.transactions,
        request.planned_expenses,
        request.manual_salary,
        month=request.month,
        include_validation=request.include_validation,
    )


@router.post("/validate", response_model=ValidationReport)
def validate(request: SummaryRequest) -> ValidationReport:
    """
    Validate one scope (request.month, or all months when omitted).

    isValid is false only when the balance formula check fails; data-quality
    problems are listed as warnings.
    """
    return validate_summary(
        request.transactions,
        request.planned_expenses,
        request.manual_salary,
        request.month,
        scope=scope_for(request.month),
    )
