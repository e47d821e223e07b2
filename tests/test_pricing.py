from decimal import Decimal

from app.core.pricing import compute_totals, round2
from app.schemas.order import OrderItemCreate


def _item(product_id, quantity, unit_price):
    return OrderItemCreate(product_id=product_id, quantity=quantity, unit_price=unit_price)


class TestRound2:
    def test_rounds_half_away_from_zero(self):
        assert round2(Decimal("0.005")) == Decimal("0.01")
        assert round2(Decimal("2.675")) == Decimal("2.68")
        assert round2(Decimal("-0.005")) == Decimal("-0.01")

    def test_float_input_is_taken_as_written(self):
        # 10.005 as a binary float is slightly below 10.005
        assert round2(10.005) == Decimal("10.01")

    def test_always_two_places(self):
        assert round2(Decimal("7")) == Decimal("7.00")
        assert str(round2(Decimal("7"))) == "7.00"


class TestComputeTotals:
    def test_line_total_is_quantity_times_price(self):
        total, lines = compute_totals([_item(1, 2, "10.005")])

        assert lines[0].line_total == Decimal("20.01")
        assert total == Decimal("20.01")

    def test_lines_are_rounded_before_summing(self):
        # Summing first would give 0.01; each line rounds up to 0.01 on its own
        total, lines = compute_totals([_item(1, 1, "0.005"), _item(2, 1, "0.005")])

        assert [line.line_total for line in lines] == [Decimal("0.01"), Decimal("0.01")]
        assert total == Decimal("0.02")

    def test_total_matches_sum_of_rounded_lines(self):
        items = [
            _item(1, 3, "19.999"),
            _item(2, 7, "0.333"),
            _item(3, 100000, "0.015"),
        ]

        total, lines = compute_totals(items)

        expected = round2(sum(round2(Decimal(str(i.unit_price)) * i.quantity) for i in items))
        assert total == expected
        assert total == sum(line.line_total for line in lines)

    def test_keeps_input_order_and_references(self):
        total, lines = compute_totals([_item(5, 1, "1"), _item(3, 2, "2.5")])

        assert [line.product_id for line in lines] == [5, 3]
        assert [line.quantity for line in lines] == [1, 2]
        assert total == Decimal("6.00")

    def test_zero_price_lines(self):
        total, lines = compute_totals([_item(1, 4, "0")])

        assert lines[0].line_total == Decimal("0.00")
        assert total == Decimal("0.00")
