from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional
from decimal import Decimal

from caixa.schemas.transactions import Ref


class PlannedExpense(BaseModel):
    """
    A budgeted expense entered for one month ("gasto planejado").

    Independent of bank transactions; its total is subtracted from the
    month balance as if it had already been spent.
    """
    id: Optional[Ref] = None
    month: str = Field(validation_alias=AliasChoices("month", "mes"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "nome"))
    category_ref: Optional[Ref] = Field(
        default=None,
        validation_alias=AliasChoices("category_ref", "categoryRef", "categoria_id"),
    )
    quantity: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        validation_alias=AliasChoices("quantity", "quantidade"),
    )
    unit_value: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("unit_value", "unitValue", "valor_unitario"),
    )
    total_value: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("total_value", "totalValue", "valor_total"),
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "month": "janeiro 2024",
                "name": "Academia",
                "quantity": 1,
                "unitValue": None,
                "totalValue": 120.00
            }
        }
    )

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v: Any) -> Any:
        return Decimal("0") if v is None else v

    @property
    def derived_total(self) -> Decimal:
        """
        Total for the month.

        - total_value when present and positive (fixed expense)
        - else quantity x unit_value (variable expense)
        - else quantity alone, as a last resort
        """
        if self.total_value is not None and self.total_value > 0:
            return self.total_value
        if self.quantity and self.unit_value:
            return self.quantity * self.unit_value
        return self.quantity
