# models/purchases.py

from sqlalchemy import Column, Index, Integer, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)

    # Suppliers are not modelled; the reference is kept as given
    supplier_id = Column(Integer, nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    payment_method = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)

    total = Column(Numeric(18, 2), nullable=False)

    items = relationship(
        "PurchaseItem",
        back_populates="purchase",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_purchases_user_date", "user_id", "date"),
    )
