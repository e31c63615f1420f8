"""Domain service: activity cost calculation.

A pure, read-only computation over reservation snapshots and product
metadata. Consumables are charged per unit used; tools are charged one
depreciation increment per reservation, whatever quantity was recorded.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping

from agrotic.domain.model.product import Product
from agrotic.domain.model.reservation import Reservation
from agrotic.domain.model.value_objects import ZERO, round2, to_decimal

# Share of the purchase price a tool is still worth at the end of its life.
RESIDUAL_RATE = Decimal("0.10")


@dataclass(frozen=True)
class CostLine:
    reservation: Reservation
    product: Product | None
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class ActivityCost:
    lines: list[CostLine]
    inputs_cost: Decimal
    labor_cost: Decimal

    @property
    def total_cost(self) -> Decimal:
        return round2(self.inputs_cost + self.labor_cost)


def per_unit_price(reservation: Reservation) -> Decimal:
    """Snapshot price divided by snapshot capacity, 0 without a capacity."""
    capacity = to_decimal(reservation.presentation_capacity)
    if capacity <= ZERO:
        return ZERO
    return reservation.unit_price.amount / capacity


def cost_per_use(price: Decimal, useful_life_uses: int) -> Decimal:
    """Straight-line depreciation down to a 10% residual value."""
    residual = round2(price * RESIDUAL_RATE)
    return round2((price - residual) / Decimal(useful_life_uses))


def price_line(reservation: Reservation, product: Product | None) -> CostLine:
    used = to_decimal(reservation.used_quantity)
    divisible = product is None or product.is_divisible
    life = product.useful_life_uses if product is not None else None

    if not divisible and life:
        unit_price = cost_per_use(reservation.unit_price.amount, life)
        subtotal = unit_price
    else:
        unit_price = per_unit_price(reservation)
        subtotal = round2(used * unit_price)
    return CostLine(reservation, product, unit_price, subtotal)


def calculate_activity_cost(
    reservations: Iterable[Reservation],
    products_by_lot: Mapping[str, Product],
    hours_worked: Decimal | None = None,
    hourly_rate: Decimal | None = None,
) -> ActivityCost:
    """Per-line and total cost of an activity's reservations plus labor."""
    lines = [
        price_line(reservation, products_by_lot.get(reservation.lot_id))
        for reservation in reservations
    ]
    inputs_cost = round2(sum((line.subtotal for line in lines), ZERO))
    if hours_worked is None or hourly_rate is None:
        labor_cost = ZERO
    else:
        labor_cost = round2(to_decimal(hours_worked) * to_decimal(hourly_rate))
    return ActivityCost(lines=lines, inputs_cost=inputs_cost, labor_cost=labor_cost)
