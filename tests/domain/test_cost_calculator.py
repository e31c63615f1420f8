"""Unit tests for the activity cost calculation."""

from decimal import Decimal

from agrotic.domain.model.reservation import Reservation, ReservationStatus
from agrotic.domain.model.value_objects import Money
from agrotic.domain.service.cost_calculator import (
    calculate_activity_cost,
    cost_per_use,
    per_unit_price,
    price_line,
)
from tests.fakes import TOOLS, make_product


def _confirmed(lot_id: str, reserved: str, used: str, price: str, capacity: str | None) -> Reservation:
    return Reservation(
        id=None,
        activity_id="a1",
        lot_id=lot_id,
        reserved_quantity=Decimal(reserved),
        presentation_capacity=Decimal(capacity) if capacity is not None else None,
        unit_price=Money.of(price),
        status=ReservationStatus.CONFIRMED,
        used_quantity=Decimal(used),
    )


class TestConsumables:

    def test_unit_price_times_used(self):
        product = make_product(price="100", capacity="10")
        r = _confirmed("L1", "3", "3", "100", "10")

        line = price_line(r, product)

        assert line.unit_price == Decimal("10")
        assert line.subtotal == Decimal("30.00")

    def test_snapshot_price_wins_over_current_product_price(self):
        product = make_product(price="999", capacity="50")
        r = _confirmed("L1", "4", "4", "100", "10")
        assert price_line(r, product).subtotal == Decimal("40.00")

    def test_missing_capacity_costs_nothing(self):
        r = _confirmed("L1", "4", "4", "100", None)
        assert per_unit_price(r) == Decimal("0")
        assert price_line(r, make_product()).subtotal == Decimal("0.00")

    def test_subtotal_rounded_to_cents(self):
        r = _confirmed("L1", "1", "1", "100", "3")
        assert price_line(r, make_product()).subtotal == Decimal("33.33")

    def test_missing_product_costed_as_consumable(self):
        r = _confirmed("L1", "2", "2", "100", "10")
        assert price_line(r, None).subtotal == Decimal("20.00")


class TestTools:

    def test_cost_per_use_keeps_ten_percent_residual(self):
        assert cost_per_use(Decimal("1000"), 100) == Decimal("9.00")

    def test_tool_charged_once_per_reservation(self):
        tool = make_product("t1", "Sprayer", price="1000", capacity="1",
                            category=TOOLS, useful_life_uses=100)
        reservations = [_confirmed(f"L{i}", "5", "5", "1000", "1") for i in range(5)]
        products = {r.lot_id: tool for r in reservations}

        cost = calculate_activity_cost(reservations, products)

        assert [line.subtotal for line in cost.lines] == [Decimal("9.00")] * 5
        assert cost.inputs_cost == Decimal("45.00")

    def test_tool_without_useful_life_uses_unit_formula(self):
        tool = make_product("t1", "Shovel", price="100", capacity="1", category=TOOLS)
        r = _confirmed("L1", "2", "2", "100", "1")
        assert price_line(r, tool).subtotal == Decimal("200.00")


class TestActivityTotals:

    def test_inputs_plus_labor(self):
        product = make_product(price="100", capacity="10")
        reservations = [
            _confirmed("L1", "3", "3", "100", "10"),
            _confirmed("L1", "5", "2.5", "100", "10"),
        ]
        cost = calculate_activity_cost(
            reservations, {"L1": product},
            hours_worked=Decimal("8"), hourly_rate=Decimal("12500.5"),
        )
        assert cost.inputs_cost == Decimal("55.00")
        assert cost.labor_cost == Decimal("100004.00")
        assert cost.total_cost == Decimal("100059.00")

    def test_labor_is_zero_without_rate(self):
        cost = calculate_activity_cost([], {}, hours_worked=Decimal("8"))
        assert cost.labor_cost == Decimal("0")
        assert cost.total_cost == Decimal("0.00")
