# app/core/stock.py

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.errors import StockInsufficientError
from app.models.products import Product


def subtract_stock_bulk(db: Session, items) -> None:
    """
    Take ``quantity`` units of each product out of stock.

    Runs inside the caller's transaction. Each row is decremented by a
    single conditional UPDATE so concurrent sales serialize on the row
    lock instead of racing a separate read. The first line that cannot
    be covered raises StockInsufficientError and the caller rolls back
    everything, including lines already decremented.
    """
    for item in items:
        result = db.execute(
            update(Product)
            .where(
                Product.id == item.product_id,
                Product.quantity >= item.quantity,
            )
            .values(quantity=Product.quantity - item.quantity)
            .execution_options(synchronize_session=False)
        )

        # Missing product or not enough units
        if result.rowcount == 0:
            raise StockInsufficientError(item.product_id)


def add_stock_bulk(db: Session, items) -> None:
    """Put units back, e.g. when a sale is deleted or its lines replaced."""
    for item in items:
        db.execute(
            update(Product)
            .where(Product.id == item.product_id)
            .values(quantity=Product.quantity + item.quantity)
            .execution_options(synchronize_session=False)
        )
