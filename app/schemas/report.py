# schemas/report.py

from datetime import date
from decimal import Decimal
from typing import List

from app.schemas.order import CamelModel


class FlowSummary(CamelModel):
    total: Decimal
    count: int


class DailyTotal(CamelModel):
    day: date
    total: Decimal


class TopProduct(CamelModel):
    product_id: int
    name: str
    product_name: str | None
    product_reference: str | None
    quantity: int
    total: Decimal


class SummaryReportResponse(CamelModel):
    start_date: date
    end_date: date
    income: FlowSummary
    expenses: FlowSummary
    net_result: Decimal
    sales_by_day: List[DailyTotal]
    purchases_by_day: List[DailyTotal]
    top_products_sold: List[TopProduct]
    top_products_bought: List[TopProduct]
