"""
Description-based classification of transactions.

Both classifiers are broad substring matches over folded text (see
text_helpers.normalize). False positives are possible; the keyword tables
live in settings so they can be tuned without touching the aggregation.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from caixa.core.config import settings
from caixa.schemas.transactions import ScopeContext
from caixa.utils.text_helpers import contains_any, normalize


class ClassificationRules(BaseModel):
    """Keyword tables used by is_ignorable() and is_salary()."""
    ignore_patterns: List[str]
    ignore_patterns_global_only: List[str]
    salary_keywords: List[str]
    salary_transfer_phrases: List[str]
    salary_payer_names: List[str]

    model_config = ConfigDict(frozen=True)

    def ignore_set(self, scope: ScopeContext) -> List[str]:
        """Global = every exclusion; monthly = without bill payments and transfers."""
        if scope is ScopeContext.GLOBAL:
            return [*self.ignore_patterns, *self.ignore_patterns_global_only]
        return list(self.ignore_patterns)


def default_rules() -> ClassificationRules:
    return ClassificationRules(
        ignore_patterns=settings.IGNORE_PATTERNS,
        ignore_patterns_global_only=settings.IGNORE_PATTERNS_GLOBAL_ONLY,
        salary_keywords=settings.SALARY_KEYWORDS,
        salary_transfer_phrases=settings.SALARY_TRANSFER_PHRASES,
        salary_payer_names=settings.SALARY_PAYER_NAMES,
    )


def is_ignorable(
    description: Optional[str],
    scope: ScopeContext,
    rules: Optional[ClassificationRules] = None,
) -> bool:
    """
    True if the movement is non-economic for the given scope.

    Credit-card bill settlements count as outflows in a single month but are
    excluded from the all-months aggregate, where the card purchases they pay
    for are already counted.
    """
    rules = rules or default_rules()
    return contains_any(description or "", rules.ignore_set(scope))


def is_salary(description: Optional[str], rules: Optional[ClassificationRules] = None) -> bool:
    """
    True if an entrada looks like a payroll deposit.

    Matches a salary keyword, or a received-transfer phrase together with a
    known payer name (payroll that arrives as a plain bank transfer).
    """
    rules = rules or default_rules()
    text = normalize(description)
    if not text:
        return False

    if contains_any(text, rules.salary_keywords):
        return True

    return contains_any(text, rules.salary_transfer_phrases) and contains_any(
        text, rules.salary_payer_names
    )
