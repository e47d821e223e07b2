# =========================================================
# REPORTS ROUTER
#
# Income (sales) against expenses (purchases) for the
# current user over an inclusive range of days. Built on
# the same date-range read the order engine exposes, so the
# figures always match what /ventas and /compras return.
# =========================================================

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.orders import PURCHASES, SALES, OrderService
from app.core.pricing import ZERO, round2
from app.schemas.report import SummaryReportResponse

router = APIRouter(prefix="/reportes", tags=["Reports"])


# =========================================================
# AGGREGATION HELPERS
# =========================================================
def _sum_totals(orders: list[dict]) -> Decimal:
    return round2(sum((Decimal(o["total"]) for o in orders), ZERO))


def _totals_by_day(orders: list[dict]) -> list[dict]:
    by_day = defaultdict(lambda: ZERO)
    for order in orders:
        by_day[order["date"].date()] += Decimal(order["total"])

    return [
        {"day": day, "total": round2(total)}
        for day, total in sorted(by_day.items())
    ]


def _top_products(orders: list[dict]) -> list[dict]:
    products = {}
    for order in orders:
        for item in order["items"]:
            entry = products.setdefault(
                item["product_id"],
                {
                    "product_id": item["product_id"],
                    "product_name": item["product_name"],
                    "product_reference": item["product_reference"],
                    "quantity": 0,
                    "total": ZERO,
                },
            )
            entry["quantity"] += item["quantity"]
            entry["total"] += Decimal(item["line_total"])

    results = []
    for entry in products.values():
        parts = [p for p in (entry["product_name"], entry["product_reference"]) if p]
        entry["name"] = " - ".join(parts) if parts else f"Product {entry['product_id']}"
        entry["total"] = round2(entry["total"])
        results.append(entry)

    # Most units first, revenue breaks ties
    results.sort(key=lambda e: (-e["quantity"], -e["total"]))
    return results


# =========================================================
# SUMMARY
# =========================================================
@router.get("/resumen", response_model=SummaryReportResponse)
def get_summary(
    desde: date = Query(..., description="First day of the range (inclusive)"),
    hasta: date = Query(..., description="Last day of the range (inclusive)"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if hasta < desde:
        raise HTTPException(
            status_code=400,
            detail="hasta must be on or after desde",
        )

    start_dt = datetime.combine(desde, datetime.min.time())
    end_dt = datetime.combine(hasta, datetime.max.time())

    sales = OrderService(SALES, db).get_by_date_range(current_user.id, start_dt, end_dt)
    purchases = OrderService(PURCHASES, db).get_by_date_range(current_user.id, start_dt, end_dt)

    income = _sum_totals(sales)
    expenses = _sum_totals(purchases)

    return {
        "start_date": desde,
        "end_date": hasta,
        "income": {"total": income, "count": len(sales)},
        "expenses": {"total": expenses, "count": len(purchases)},
        "net_result": round2(income - expenses),
        "sales_by_day": _totals_by_day(sales),
        "purchases_by_day": _totals_by_day(purchases),
        "top_products_sold": _top_products(sales),
        "top_products_bought": _top_products(purchases),
    }
