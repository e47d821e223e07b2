# app/routers/products.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import translate_integrity_error
from app.models.products import Product
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)

router = APIRouter(
    prefix="/productos",
    tags=["Products"],
)

logger = logging.getLogger("app")

PRODUCT_CONSTRAINT_MESSAGES = {
    "uq_products_reference": "Product reference already exists",
    "products.reference": "Product reference already exists",
    "fk_sale_items_product": "Product is referenced by existing orders",
    "fk_purchase_items_product": "Product is referenced by existing orders",
    "FOREIGN KEY": "Product is referenced by existing orders",
}


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return product


def _commit(db: Session, action: str):
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise translate_integrity_error(exc, PRODUCT_CONSTRAINT_MESSAGES) from exc
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Unable to {action} product")
        raise HTTPException(status_code=500, detail=f"Unable to {action} product")


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    # References are unique across the catalog
    existing_product = (
        db.query(Product)
        .filter(Product.reference == product_data.reference)
        .first()
    )
    if existing_product:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Product reference already exists",
        )

    product = Product(**product_data.model_dump())

    db.add(product)
    _commit(db, "create")
    db.refresh(product)

    return product


@router.get("", response_model=list[ProductResponse])
def list_products(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    products = (
        db.query(Product)
        .order_by(Product.name.asc(), Product.id.asc())
        .all()
    )

    return products


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return _get_product_or_404(db, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    changes = product_data.model_dump(exclude_unset=True)

    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid fields to update",
        )

    if any(value is None for value in changes.values()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product fields cannot be null",
        )

    product = _get_product_or_404(db, product_id)

    if "reference" in changes and changes["reference"] != product.reference:
        duplicate = (
            db.query(Product)
            .filter(Product.reference == changes["reference"], Product.id != product_id)
            .first()
        )
        if duplicate:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product reference already exists",
            )

    for field, value in changes.items():
        setattr(product, field, value)

    _commit(db, "update")
    db.refresh(product)

    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    product = _get_product_or_404(db, product_id)

    db.delete(product)
    _commit(db, "delete")

    return None
