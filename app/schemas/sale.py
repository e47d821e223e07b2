# schemas/sale.py

from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import Field, field_validator

from app.schemas.order import (
    MAX_ITEMS,
    CamelModel,
    OrderItemCreate,
    OrderItemResponse,
    blank_to_none,
)


class SaleCreate(CamelModel):
    client_id: int | None = Field(None, gt=0)
    date: datetime | None = None
    payment_method: str | None = Field(None, max_length=50)
    items: List[OrderItemCreate] = Field(..., min_length=1, max_length=MAX_ITEMS)

    @field_validator("date", "payment_method", mode="before")
    @classmethod
    def empty_strings_to_none(cls, value):
        return blank_to_none(value)


class SaleUpdate(CamelModel):
    client_id: int | None = Field(None, gt=0)
    date: datetime | None = None
    payment_method: str | None = Field(None, max_length=50)
    items: List[OrderItemCreate] | None = Field(None, min_length=1, max_length=MAX_ITEMS)

    @field_validator("date", "payment_method", mode="before")
    @classmethod
    def empty_strings_to_none(cls, value):
        return blank_to_none(value)


class SaleResponse(CamelModel):
    id: int
    client_id: int | None
    user_id: int
    date: datetime
    payment_method: str | None
    total: Decimal
    items: List[OrderItemResponse]
