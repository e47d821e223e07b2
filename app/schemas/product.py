from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class ProductCreate(BaseModel):
    reference: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)

    price: Decimal = Field(
        ...,
        ge=0,
        le=100_000_000,
        description="Price cannot exceed 100 million"
    )

    quantity: int = Field(..., ge=0, description="Units in stock")

    @field_validator("reference", "category", "name", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class ProductUpdate(BaseModel):
    reference: str | None = Field(None, min_length=1, max_length=100)
    category: str | None = Field(None, min_length=1, max_length=100)
    name: str | None = Field(None, min_length=1, max_length=255)
    price: Decimal | None = Field(None, ge=0, le=100_000_000)
    quantity: int | None = Field(None, ge=0)

    @field_validator("reference", "category", "name", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class ProductResponse(BaseModel):
    id: int
    reference: str
    category: str
    name: str
    price: float
    quantity: int
    created_at: datetime

    class Config:
        from_attributes = True
