# app/models/audit_events.py

from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime, JSON, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from app.database import Base


JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class AuditEvent(Base):
    """Append-only record of a create/update/delete on an audited entity."""

    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, index=True)

    entity = Column(String(50), nullable=False, index=True)
    record_id = Column(String(50), nullable=False, index=True)
    action = Column(String(10), nullable=False)

    # Plain reference; events outlive the users that caused them
    user_id = Column(Integer, nullable=True, index=True)

    prior_data = Column(JSONDocument, nullable=True)
    new_data = Column(JSONDocument, nullable=True)
    description = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            "action IN ('CREATE', 'UPDATE', 'DELETE')",
            name="ck_audit_events_action_valid",
        ),
    )
