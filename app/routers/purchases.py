# =========================================================
# PURCHASES ROUTER
#
# - Every purchase belongs to the user that created it
# - Another user's purchase answers 404, exactly like a missing one
# - Totals are computed server side from the submitted lines
# - Updating with items replaces all lines
# =========================================================

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.audit import AuditDispatcher, get_audit_dispatcher
from app.core.errors import NotFoundError
from app.core.orders import PURCHASES, OrderService
from app.core.rate_limiter import limiter
from app.schemas.purchase import PurchaseCreate, PurchaseUpdate, PurchaseResponse

router = APIRouter(prefix="/compras", tags=["Purchases"])


def get_purchase_service(
    db: Session = Depends(get_db),
    audit: AuditDispatcher = Depends(get_audit_dispatcher),
) -> OrderService:
    return OrderService(PURCHASES, db, audit)


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_purchase(
    request: Request,
    purchase_data: PurchaseCreate,
    service: OrderService = Depends(get_purchase_service),
    current_user=Depends(get_current_user),
):
    return service.create(
        current_user.id,
        purchase_data.model_dump(exclude={"items"}),
        purchase_data.items,
    )


@router.get("", response_model=list[PurchaseResponse])
def list_purchases(
    service: OrderService = Depends(get_purchase_service),
    current_user=Depends(get_current_user),
):
    return service.get_all(current_user.id)


@router.get("/{purchase_id}", response_model=PurchaseResponse)
def get_purchase(
    purchase_id: int,
    service: OrderService = Depends(get_purchase_service),
    current_user=Depends(get_current_user),
):
    purchase = service.get_by_id(purchase_id, current_user.id)

    if not purchase:
        raise NotFoundError("Purchase not found")

    return purchase


@router.put("/{purchase_id}", response_model=PurchaseResponse)
def update_purchase(
    purchase_id: int,
    purchase_data: PurchaseUpdate,
    service: OrderService = Depends(get_purchase_service),
    current_user=Depends(get_current_user),
):
    # Only fields present in the body are touched
    fields = purchase_data.model_dump(exclude_unset=True, exclude={"items"})

    return service.update(purchase_id, current_user.id, fields, purchase_data.items)


@router.delete("/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_purchase(
    purchase_id: int,
    service: OrderService = Depends(get_purchase_service),
    current_user=Depends(get_current_user),
):
    service.delete(purchase_id, current_user.id)

    return None
