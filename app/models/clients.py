# app/models/clients.py

from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime, Text, UniqueConstraint
from sqlalchemy.sql import func

from app.database import Base


CLIENT_TYPES = ("Natural", "Juridica")
DOCUMENT_TYPES = ("NIT", "CC", "CE", "RUC", "DNI")
CLIENT_STATUSES = ("Activo", "Inactivo")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    client_type = Column(String(20), nullable=False)
    name = Column(String(255), nullable=False)
    document_type = Column(String(10), nullable=False)
    document_number = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="Activo")
    registered_by = Column(String(150), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_clients_email"),
        UniqueConstraint("document_number", name="uq_clients_document_number"),
        CheckConstraint("client_type IN ('Natural', 'Juridica')", name="ck_clients_client_type"),
        CheckConstraint("status IN ('Activo', 'Inactivo')", name="ck_clients_status"),
    )
