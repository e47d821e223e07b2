# schemas/client.py

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from app.schemas.order import CamelModel


ClientType = Literal["Natural", "Juridica"]
DocumentType = Literal["NIT", "CC", "CE", "RUC", "DNI"]
ClientStatus = Literal["Activo", "Inactivo"]


class ClientCreate(CamelModel):
    client_type: ClientType
    name: str = Field(..., min_length=1, max_length=255)
    document_type: DocumentType
    document_number: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    status: ClientStatus = "Activo"
    registered_by: str | None = Field(None, max_length=150)
    notes: str | None = None


class ClientUpdate(CamelModel):
    client_type: ClientType | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    document_type: DocumentType | None = None
    document_number: str | None = Field(None, min_length=1, max_length=50)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    status: ClientStatus | None = None
    registered_by: str | None = Field(None, max_length=150)
    notes: str | None = None


class ClientResponse(CamelModel):
    id: int
    client_type: str
    name: str
    document_type: str
    document_number: str
    email: str
    phone: str | None
    address: str | None
    city: str | None
    country: str | None
    status: str
    registered_by: str | None
    notes: str | None
    created_at: datetime
