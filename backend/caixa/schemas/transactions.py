from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import date as DateType, datetime
from typing import Any, List, Optional, Union
from decimal import Decimal
from enum import Enum

from caixa.utils.number_helpers import to_decimal


Ref = Union[int, str]


class TransactionType(str, Enum):
    """Direction of a movement. The stored value is always positive."""
    ENTRADA = "entrada"  # Crédito
    SAIDA = "saida"      # Débito


class ScopeContext(str, Enum):
    """
    Which ignore-pattern set applies.

    GLOBAL is the all-months aggregate, MONTHLY any single-month view.
    """
    GLOBAL = "global"
    MONTHLY = "monthly"


def scope_for(month: Optional[str]) -> ScopeContext:
    """Pick the scope for a month filter: a filter means MONTHLY, none means GLOBAL."""
    return ScopeContext.MONTHLY if month else ScopeContext.GLOBAL


class Transaction(BaseModel):
    """
    A single economic movement as read from the store or a statement.

    Tolerant on purpose: a non-numeric value becomes None, an unparseable
    date becomes None and an unknown type string is kept as-is. The
    validator reports those records; the aggregator skips what it can't use.
    """
    id: Optional[Ref] = None
    date: Optional[DateType] = Field(default=None, validation_alias=AliasChoices("date", "data"))
    value: Optional[Decimal] = Field(default=None, validation_alias=AliasChoices("value", "valor"))
    type: Optional[str] = Field(default=None, validation_alias=AliasChoices("type", "tipo"))
    description: str = Field(default="", validation_alias=AliasChoices("description", "descricao"))
    category_ref: Optional[Ref] = Field(
        default=None,
        validation_alias=AliasChoices("category_ref", "categoryRef", "categoria_id"),
    )
    contact_ref: Optional[Ref] = Field(
        default=None,
        validation_alias=AliasChoices("contact_ref", "contactRef", "contato_id"),
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 42,
                "date": "2024-01-15",
                "value": 1200.00,
                "type": "saida",
                "description": "PAGAMENTO CARTAO",
                "categoryRef": 3,
                "contactRef": None
            }
        }
    )

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Optional[DateType]:
        if v is None:
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, DateType):
            return v
        try:
            # Accepts "2024-01-10" and timestamps like "2024-01-10T03:00:00Z"
            return DateType.fromisoformat(str(v).strip()[:10])
        except ValueError:
            return None

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, v: Any) -> Optional[Decimal]:
        return to_decimal(v, default=None)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, TransactionType):
            return v.value
        return str(v).strip().lower()

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def kind(self) -> Optional[TransactionType]:
        """The typed direction, or None when type is missing or unknown."""
        try:
            return TransactionType(self.type)
        except ValueError:
            return None

    @property
    def amount(self) -> Decimal:
        """Value used in sums; missing values count as zero."""
        return self.value if self.value is not None else Decimal("0")


class TransactionCreate(BaseModel):
    """Strict record for a single manual insert (input)."""
    date: DateType = Field(validation_alias=AliasChoices("date", "data"))
    value: Decimal = Field(gt=0, validation_alias=AliasChoices("value", "valor"))
    type: TransactionType = Field(validation_alias=AliasChoices("type", "tipo"))
    description: str = Field(default="", validation_alias=AliasChoices("description", "descricao"))
    category_ref: Optional[Ref] = Field(
        default=None,
        validation_alias=AliasChoices("category_ref", "categoryRef", "categoria_id"),
    )
    contact_ref: Optional[Ref] = Field(
        default=None,
        validation_alias=AliasChoices("contact_ref", "contactRef", "contato_id"),
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    def to_transaction(self) -> Transaction:
        return Transaction(**self.model_dump())


class DuplicateCheckRequest(BaseModel):
    """Single insert check: one candidate against what the store already holds."""
    candidate: TransactionCreate
    existing: List[Transaction] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class ImportRequest(BaseModel):
    """Bulk import: a parsed batch against one snapshot of existing records."""
    candidates: List[Transaction]
    existing: List[Transaction] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class ImportPartition(BaseModel):
    """Import candidates split into records to insert and re-imports to skip (output)"""
    new: List[Transaction] = []
    duplicates: List[Transaction] = []

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "new": [
                    {"date": "2024-01-11", "value": 35.9, "type": "saida", "description": "Padaria"}
                ],
                "duplicates": [
                    {"date": "2024-01-10", "value": 100, "type": "saida", "description": "uber"}
                ]
            }
        }
    )
