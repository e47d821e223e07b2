# app/routers/clients.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import translate_integrity_error
from app.models.clients import Client
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse

router = APIRouter(prefix="/clientes", tags=["Clients"])

logger = logging.getLogger("app")

CLIENT_CONSTRAINT_MESSAGES = {
    "uq_clients_email": "Email is already registered",
    "clients.email": "Email is already registered",
    "uq_clients_document_number": "Document number is already registered",
    "clients.document_number": "Document number is already registered",
    "fk_sales_client": "Client is referenced by existing sales",
    "FOREIGN KEY": "Client is referenced by existing sales",
}

# Columns a client may never be left without
REQUIRED_FIELDS = ("client_type", "name", "document_type", "document_number", "email", "status")


def _get_client_or_404(db: Session, client_id: int) -> Client:
    client = db.query(Client).filter(Client.id == client_id).first()

    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )

    return client


def _ensure_unique(db: Session, email: str | None, document_number: str | None, exclude_id: int | None = None):
    query = db.query(Client)
    if exclude_id is not None:
        query = query.filter(Client.id != exclude_id)

    if email is not None and query.filter(Client.email == email).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered",
        )

    if document_number is not None and query.filter(Client.document_number == document_number).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Document number is already registered",
        )


def _commit(db: Session, action: str):
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise translate_integrity_error(exc, CLIENT_CONSTRAINT_MESSAGES) from exc
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Unable to {action} client")
        raise HTTPException(status_code=500, detail=f"Unable to {action} client")


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    _ensure_unique(db, client_data.email, client_data.document_number)

    client = Client(**client_data.model_dump())

    db.add(client)
    _commit(db, "create")
    db.refresh(client)

    return client


@router.get("", response_model=list[ClientResponse])
def list_clients(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(Client).order_by(Client.name.asc()).all()


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return _get_client_or_404(db, client_id)


@router.put("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: int,
    client_data: ClientUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    changes = client_data.model_dump(exclude_unset=True)

    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid fields to update",
        )

    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{field} is required",
            )

    client = _get_client_or_404(db, client_id)
    _ensure_unique(db, changes.get("email"), changes.get("document_number"), exclude_id=client_id)

    for field, value in changes.items():
        setattr(client, field, value)

    _commit(db, "update")
    db.refresh(client)

    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    client = _get_client_or_404(db, client_id)

    db.delete(client)
    _commit(db, "delete")

    return None
