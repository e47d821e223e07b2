# =========================================================
# SALES ROUTER
#
# - Every sale belongs to the user that created it
# - Another user's sale answers 404, exactly like a missing one
# - Totals are computed server side from the submitted lines
# - Creating a sale takes its quantities out of stock
# - Updating with items replaces all lines (stock follows)
# =========================================================

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.audit import AuditDispatcher, get_audit_dispatcher
from app.core.errors import NotFoundError
from app.core.orders import SALES, OrderService
from app.core.rate_limiter import limiter
from app.schemas.sale import SaleCreate, SaleUpdate, SaleResponse

router = APIRouter(prefix="/ventas", tags=["Sales"])


def get_sale_service(
    db: Session = Depends(get_db),
    audit: AuditDispatcher = Depends(get_audit_dispatcher),
) -> OrderService:
    return OrderService(SALES, db, audit)


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_sale(
    request: Request,
    sale_data: SaleCreate,
    service: OrderService = Depends(get_sale_service),
    current_user=Depends(get_current_user),
):
    return service.create(
        current_user.id,
        sale_data.model_dump(exclude={"items"}),
        sale_data.items,
    )


@router.get("", response_model=list[SaleResponse])
def list_sales(
    service: OrderService = Depends(get_sale_service),
    current_user=Depends(get_current_user),
):
    return service.get_all(current_user.id)


@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    service: OrderService = Depends(get_sale_service),
    current_user=Depends(get_current_user),
):
    sale = service.get_by_id(sale_id, current_user.id)

    if not sale:
        raise NotFoundError("Sale not found")

    return sale


@router.put("/{sale_id}", response_model=SaleResponse)
def update_sale(
    sale_id: int,
    sale_data: SaleUpdate,
    service: OrderService = Depends(get_sale_service),
    current_user=Depends(get_current_user),
):
    # Only fields present in the body are touched
    fields = sale_data.model_dump(exclude_unset=True, exclude={"items"})

    return service.update(sale_id, current_user.id, fields, sale_data.items)


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(
    sale_id: int,
    service: OrderService = Depends(get_sale_service),
    current_user=Depends(get_current_user),
):
    service.delete(sale_id, current_user.id)

    return None
