"""Lot aggregate: one physical receipt of a product in one warehouse.

A lot has two spendable pools: ``available_quantity`` (fresh stock,
``stock x presentation capacity``) and ``partial_quantity`` (units returned
from cancelled reservations). Neither pool may go negative.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable

from agrotic.domain.exceptions import ValidationError
from agrotic.domain.model.reservation import Reservation
from agrotic.domain.model.value_objects import ZERO, round2, to_decimal


@dataclass
class Lot:
    """Aggregate root for inventory lots.

    Invariants:
    - ``available_quantity`` >= 0
    - ``partial_quantity`` >= 0
    """

    id: str | None
    product_id: str
    warehouse_id: str | None
    stock: Decimal
    available_quantity: Decimal
    partial_quantity: Decimal = ZERO
    expires_on: date | None = None
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW lots only) -------------------------------------

    @staticmethod
    def receive(
        product_id: str,
        warehouse_id: str | None,
        stock: Decimal,
        capacity: Decimal,
        expires_on: date | None = None,
    ) -> Lot:
        if stock < ZERO:
            raise ValidationError("Lot stock cannot be negative")
        return Lot(
            id=None,
            product_id=product_id,
            warehouse_id=warehouse_id,
            stock=to_decimal(stock),
            available_quantity=round2(to_decimal(stock) * capacity),
            expires_on=expires_on,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def stock_total(self) -> Decimal:
        return round2(round2(self.available_quantity) + round2(self.partial_quantity))

    def held_quantity(self, reservations: Iterable[Reservation]) -> Decimal:
        """Quantity still held by reservations that are not yet confirmed."""
        held = ZERO
        for reservation in reservations:
            if reservation.lot_id == self.id and reservation.holds_stock:
                held = round2(held + reservation.unreturned_quantity)
        return held

    def available_for_reservation(self, reservations: Iterable[Reservation]) -> Decimal:
        """Fresh + partial stock minus what active reservations still hold."""
        return round2(self.stock_total - self.held_quantity(reservations))

    # --- Mutations ------------------------------------------------------------

    def restock(self, stock: Decimal, capacity: Decimal) -> None:
        """Replace the received package count and recompute fresh units."""
        if stock < ZERO:
            raise ValidationError("Lot stock cannot be negative")
        self.stock = to_decimal(stock)
        self.available_quantity = round2(self.stock * capacity)

    def return_to_partial(self, quantity: Decimal) -> None:
        """Returned units always land in the partial pool, never fresh stock."""
        if quantity <= ZERO:
            raise ValidationError("Return quantity must be positive")
        self.partial_quantity = round2(round2(self.partial_quantity) + round2(quantity))
