# =========================================================
# LINE ITEM PRICING
#
# Every line is rounded to cents on its own and the order
# total is the rounded sum of the rounded lines. Summing the
# raw products first gives different pennies; do not change.
# =========================================================

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP


CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 10.005 as written instead of its binary expansion
    return Decimal(str(value))


def round2(value) -> Decimal:
    """Round half away from zero to two decimal places."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PricedItem:
    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal


def compute_totals(items) -> tuple[Decimal, list[PricedItem]]:
    """
    Price a list of order lines.

    ``items`` is any iterable of objects exposing ``product_id``,
    ``quantity`` and ``unit_price``. Returns the order total and the
    lines with their ``line_total`` filled in, in input order.
    """
    priced = []
    for item in items:
        unit_price = to_decimal(item.unit_price)
        priced.append(
            PricedItem(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=unit_price,
                line_total=round2(unit_price * item.quantity),
            )
        )

    total = round2(sum((line.line_total for line in priced), ZERO))
    return total, priced
