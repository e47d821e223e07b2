# =========================================================
# AUDIT SINK
#
# Mutations on orders are recorded as AuditEvent rows after
# the primary transaction has committed. Recording runs as a
# FastAPI background task with its own session: a failure is
# logged and dropped, it never reaches the HTTP response.
# =========================================================

import logging
from enum import Enum

from fastapi import BackgroundTasks
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.audit_events import AuditEvent

logger = logging.getLogger("app")


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def log_event(
    db: Session,
    *,
    entity: str,
    record_id,
    action,
    user_id: int | None = None,
    prior_data=None,
    new_data=None,
    description: str | None = None,
) -> AuditEvent:
    if not entity or record_id is None or not action:
        raise ValueError("entity, record_id and action are required for auditing")

    event = AuditEvent(
        entity=entity,
        record_id=str(record_id),
        action=AuditAction(action).value,
        user_id=user_id,
        prior_data=jsonable_encoder(prior_data) if prior_data is not None else None,
        new_data=jsonable_encoder(new_data) if new_data is not None else None,
        description=description,
    )
    db.add(event)
    db.commit()

    return event


def record_event(session_factory, **event) -> None:
    db = session_factory()
    try:
        log_event(db, **event)
    except Exception:
        db.rollback()
        logger.exception(
            f"Audit event not recorded: {event.get('entity')} "
            f"{event.get('record_id')} {event.get('action')}"
        )
    finally:
        db.close()


class AuditDispatcher:
    """Schedules audit writes so the caller never waits on them."""

    def __init__(self, background_tasks: BackgroundTasks | None = None, session_factory=SessionLocal):
        self.background_tasks = background_tasks
        self.session_factory = session_factory

    def emit(self, **event) -> None:
        if self.background_tasks is None:
            record_event(self.session_factory, **event)
            return

        self.background_tasks.add_task(record_event, self.session_factory, **event)


def get_audit_dispatcher(background_tasks: BackgroundTasks) -> AuditDispatcher:
    return AuditDispatcher(background_tasks)
