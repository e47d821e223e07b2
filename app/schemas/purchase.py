# schemas/purchase.py

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


class PurchaseCreate(CamelModel):
    supplier_id: int | None = Field(None, gt=0)
    date: datetime | None = None
    payment_method: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=1000)
    items: List[OrderItemCreate] = Field(..., min_length=1, max_length=MAX_ITEMS)

    @field_validator("date", "payment_method", "notes", mode="before")
    @classmethod
    def empty_strings_to_none(cls, value):
        return blank_to_none(value)


class PurchaseUpdate(CamelModel):
    supplier_id: int | None = Field(None, gt=0)
    date: datetime | None = None
    payment_method: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=1000)
    items: List[OrderItemCreate] | None = Field(None, min_length=1, max_length=MAX_ITEMS)

    @field_validator("date", "payment_method", "notes", mode="before")
    @classmethod
    def empty_strings_to_none(cls, value):
        return blank_to_none(value)


class PurchaseResponse(CamelModel):
    id: int
    supplier_id: int | None
    user_id: int
    date: datetime
    payment_method: str | None
    notes: str | None
    total: Decimal
    items: List[OrderItemResponse]
