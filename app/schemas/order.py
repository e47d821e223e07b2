# schemas/order.py
# Pieces shared by the sale and purchase payloads

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


MAX_ITEMS = 100
MAX_QUANTITY = 100_000
MAX_UNIT_PRICE = Decimal("100000000")


class CamelModel(BaseModel):
    # Transport is camelCase, attributes and columns are snake_case
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class OrderItemCreate(CamelModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)
    unit_price: Decimal = Field(
        ...,
        ge=0,
        le=MAX_UNIT_PRICE,
        description="Unit price cannot exceed 100 million",
    )


class OrderItemResponse(CamelModel):
    id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    product_name: str | None = None
    product_reference: str | None = None
