# models/sales.py

from sqlalchemy import Column, Index, Integer, DateTime, ForeignKey, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    client_id = Column(
        Integer,
        ForeignKey("clients.id", name="fk_sales_client"),
        nullable=True,
        index=True,
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    date = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    payment_method = Column(String(50), nullable=True)

    total = Column(Numeric(18, 2), nullable=False)

    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Listing and date-range reports filter by owner and date
    __table_args__ = (
        Index("ix_sales_user_date", "user_id", "date"),
    )
