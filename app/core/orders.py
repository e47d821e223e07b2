# =========================================================
# ORDER ENGINE
#
# Sales and purchases share one shape: a header owned by a
# user plus its line items. OrderService implements reading
# and writing that aggregate once; OrderKind tells it which
# tables and fields to use.
#
# - Totals are computed on the server, never taken from input
# - Header + items are written in one transaction
# - Updates replace the whole item set or leave it untouched
# - Every header query is filtered by owner: a foreign order
#   and a missing order look the same (NotFoundError)
# =========================================================

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.audit import AuditAction, AuditDispatcher
from app.core.errors import (
    AppError,
    InternalError,
    NotFoundError,
    OrderValidationError,
    translate_integrity_error,
)
from app.core.pricing import compute_totals, round2, to_decimal
from app.core.stock import add_stock_bulk, subtract_stock_bulk
from app.models.products import Product
from app.models.purchase_items import PurchaseItem
from app.models.purchases import Purchase
from app.models.sale_items import SaleItem
from app.models.sales import Sale
from app.schemas.order import MAX_QUANTITY, MAX_UNIT_PRICE

logger = logging.getLogger("app")


MAX_ITEMS = 100

REFERENCE_MESSAGES = {
    "fk_sale_items_product": "One or more products do not exist",
    "fk_purchase_items_product": "One or more products do not exist",
    "fk_sales_client": "Client does not exist",
}


@dataclass(frozen=True)
class OrderKind:
    entity: str
    label: str
    header: type
    item: type
    item_fk: str
    header_fields: tuple[str, ...]
    tracks_stock: bool = False


SALES = OrderKind(
    entity="sale",
    label="Sale",
    header=Sale,
    item=SaleItem,
    item_fk="sale_id",
    header_fields=("client_id", "date", "payment_method"),
    tracks_stock=True,
)

PURCHASES = OrderKind(
    entity="purchase",
    label="Purchase",
    header=Purchase,
    item=PurchaseItem,
    item_fk="purchase_id",
    header_fields=("supplier_id", "date", "payment_method", "notes"),
)


def _check_items(items) -> None:
    if not items:
        raise OrderValidationError("items must contain at least one element")
    if len(items) > MAX_ITEMS:
        raise OrderValidationError(f"items cannot contain more than {MAX_ITEMS} elements")
    for item in items:
        if not 1 <= item.quantity <= MAX_QUANTITY:
            raise OrderValidationError(f"quantity must be between 1 and {MAX_QUANTITY}")
        if not 0 <= to_decimal(item.unit_price) <= MAX_UNIT_PRICE:
            raise OrderValidationError(f"unit_price must be between 0 and {MAX_UNIT_PRICE}")


class OrderService:
    def __init__(self, kind: OrderKind, db: Session, audit: AuditDispatcher | None = None):
        self.kind = kind
        self.db = db
        self.audit = audit

    # =====================================================
    # READ
    # =====================================================
    def get_by_id(self, order_id: int, user_id: int) -> dict | None:
        header = self.kind.header
        orders = self._load(header.id == order_id, header.user_id == user_id)
        return orders[0] if orders else None

    def get_all(self, user_id: int) -> list[dict]:
        return self._load(self.kind.header.user_id == user_id)

    def get_by_date_range(self, user_id: int, start: datetime, end: datetime) -> list[dict]:
        header = self.kind.header
        return self._load(
            header.user_id == user_id,
            header.date >= start,
            header.date <= end,
        )

    def _load(self, *filters) -> list[dict]:
        kind = self.kind
        headers = (
            self.db.query(kind.header)
            .filter(*filters)
            .order_by(kind.header.date.desc(), kind.header.id.desc())
            .all()
        )
        if not headers:
            return []

        item_fk = getattr(kind.item, kind.item_fk)
        rows = (
            self.db.query(kind.item, Product.name, Product.reference)
            .outerjoin(Product, Product.id == kind.item.product_id)
            .filter(item_fk.in_([h.id for h in headers]))
            .order_by(kind.item.id)
            .all()
        )

        items_by_order = defaultdict(list)
        for item, product_name, product_reference in rows:
            items_by_order[getattr(item, kind.item_fk)].append(
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "line_total": item.line_total,
                    "product_name": product_name,
                    "product_reference": product_reference,
                }
            )

        return [self._to_aggregate(h, items_by_order[h.id]) for h in headers]

    def _to_aggregate(self, header, items: list[dict]) -> dict:
        aggregate = {"id": header.id, "user_id": header.user_id}
        for field in self.kind.header_fields:
            aggregate[field] = getattr(header, field)
        aggregate["total"] = header.total
        aggregate["items"] = items
        return aggregate

    # =====================================================
    # CREATE
    # =====================================================
    def create(self, user_id: int, fields: dict, items) -> dict:
        kind = self.kind
        _check_items(items)
        total, priced = compute_totals(items)

        values = {k: v for k, v in fields.items() if k in kind.header_fields}
        # The store stamps the date when none is given
        if values.get("date") is None:
            values.pop("date", None)

        try:
            order = kind.header(user_id=user_id, total=total, **values)
            self.db.add(order)
            self.db.flush()
            order_id = order.id

            self._insert_items(order_id, priced)
            if kind.tracks_stock:
                subtract_stock_bulk(self.db, priced)

            self.db.commit()
        except AppError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise self._store_error(exc, "create") from exc

        created = self.get_by_id(order_id, user_id)
        logger.info(f"{kind.label} {order_id} created by user {user_id} total={total}")
        self._emit(order_id, AuditAction.CREATE, user_id, new_data=created)
        return created

    # =====================================================
    # UPDATE
    # =====================================================
    def update(self, order_id: int, user_id: int, fields: dict, items=None) -> dict:
        kind = self.kind
        priced = None
        values = {k: v for k, v in fields.items() if k in kind.header_fields}

        if items is not None:
            _check_items(items)
            values["total"], priced = compute_totals(items)

        # An empty date keeps the stored one
        if "date" in values and not values["date"]:
            del values["date"]

        try:
            prior = self.get_by_id(order_id, user_id)
            if prior is None:
                raise NotFoundError(f"{kind.label} not found")

            if values:
                result = self.db.execute(
                    update(kind.header)
                    .where(kind.header.id == order_id, kind.header.user_id == user_id)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise NotFoundError(f"{kind.label} not found")

            if priced is not None:
                self._replace_items(order_id, priced)

            self.db.commit()
        except AppError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise self._store_error(exc, "update") from exc

        updated = self.get_by_id(order_id, user_id)
        logger.info(f"{kind.label} {order_id} updated by user {user_id}")
        self._emit(order_id, AuditAction.UPDATE, user_id, prior_data=prior, new_data=updated)
        return updated

    # =====================================================
    # DELETE
    # =====================================================
    def delete(self, order_id: int, user_id: int) -> bool:
        kind = self.kind

        try:
            prior = self.get_by_id(order_id, user_id)
            if prior is None:
                raise NotFoundError(f"{kind.label} not found")

            if kind.tracks_stock:
                add_stock_bulk(self.db, self._current_lines(order_id))

            item_fk = getattr(kind.item, kind.item_fk)
            self.db.execute(
                delete(kind.item)
                .where(item_fk == order_id)
                .execution_options(synchronize_session=False)
            )
            result = self.db.execute(
                delete(kind.header)
                .where(kind.header.id == order_id, kind.header.user_id == user_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"{kind.label} not found")

            self.db.commit()
        except AppError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise self._store_error(exc, "delete") from exc

        logger.info(f"{kind.label} {order_id} deleted by user {user_id}")
        self._emit(order_id, AuditAction.DELETE, user_id, prior_data=prior)
        return True

    # =====================================================
    # HELPERS
    # =====================================================
    def _insert_items(self, order_id: int, priced) -> None:
        kind = self.kind
        self.db.add_all(
            [
                kind.item(
                    **{kind.item_fk: order_id},
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price=round2(line.unit_price),
                    line_total=line.line_total,
                )
                for line in priced
            ]
        )
        self.db.flush()

    def _current_lines(self, order_id: int):
        kind = self.kind
        item_fk = getattr(kind.item, kind.item_fk)
        return self.db.execute(
            select(kind.item.product_id, kind.item.quantity)
            .where(item_fk == order_id)
            .order_by(kind.item.id)
        ).all()

    def _replace_items(self, order_id: int, priced) -> None:
        kind = self.kind
        item_fk = getattr(kind.item, kind.item_fk)

        # Give back what the old lines took before taking the new amounts
        if kind.tracks_stock:
            add_stock_bulk(self.db, self._current_lines(order_id))

        self.db.execute(
            delete(kind.item)
            .where(item_fk == order_id)
            .execution_options(synchronize_session=False)
        )
        self._insert_items(order_id, priced)

        if kind.tracks_stock:
            subtract_stock_bulk(self.db, priced)

    def _store_error(self, exc: SQLAlchemyError, operation: str) -> AppError:
        if isinstance(exc, IntegrityError):
            error = translate_integrity_error(exc, REFERENCE_MESSAGES)
            if not isinstance(error, InternalError):
                return error

        logger.exception(f"Unable to {operation} {self.kind.entity}")
        return InternalError(f"Unable to {operation} {self.kind.entity}")

    def _emit(self, record_id: int, action: AuditAction, user_id: int, prior_data=None, new_data=None) -> None:
        if self.audit is None:
            return

        self.audit.emit(
            entity=self.kind.entity,
            record_id=record_id,
            action=action,
            user_id=user_id,
            prior_data=prior_data,
            new_data=new_data,
        )
