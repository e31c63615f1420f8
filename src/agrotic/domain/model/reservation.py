"""Reservation ledger row: a commitment of lot quantity to an activity.

The capacity and price fields are a point-in-time copy of the product taken
when the reservation is made. Later price changes on the product never alter
the cost of an existing reservation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from agrotic.domain.exceptions import ValidationError
from agrotic.domain.model.value_objects import ZERO, Money, round2


class ReservationStatus(Enum):
    """Values are the names stored in the reservation state lookup table."""

    RESERVED = "Reservada"
    CONFIRMED = "Confirmada"
    CANCELLED = "Cancelada"


@dataclass
class Reservation:

    id: str | None
    activity_id: str
    lot_id: str
    reserved_quantity: Decimal
    presentation_capacity: Decimal | None
    unit_price: Money  # locked at reservation time
    status: ReservationStatus = ReservationStatus.RESERVED
    used_quantity: Decimal | None = None
    returned_quantity: Decimal = ZERO

    @property
    def holds_stock(self) -> bool:
        """True while the reservation counts against lot availability.

        Confirmed reservations drop out of the held sum.
        """
        return self.status != ReservationStatus.CONFIRMED

    @property
    def is_terminal(self) -> bool:
        return self.status in (ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED)

    @property
    def unreturned_quantity(self) -> Decimal:
        return round2(round2(self.reserved_quantity) - round2(self.returned_quantity))

    @property
    def returnable_quantity(self) -> Decimal:
        """Reserved minus used and minus anything already given back."""
        remaining = round2(
            round2(self.reserved_quantity)
            - round2(self.used_quantity)
            - round2(self.returned_quantity)
        )
        return max(ZERO, remaining)

    def change_quantity(self, quantity: Decimal) -> None:
        if self.is_terminal:
            raise ValidationError(
                f"Cannot change reservation {self.id} in status {self.status.value}"
            )
        if quantity <= ZERO:
            raise ValidationError("Reservation quantity must be positive")
        self.reserved_quantity = round2(quantity)

    def confirm_usage(self, used: Decimal, reject_over_use: bool = False) -> None:
        """Transition RESERVED -> CONFIRMED, recording the used quantity.

        Using more than was reserved is accepted unless ``reject_over_use``
        is set.
        """
        if self.status != ReservationStatus.RESERVED:
            raise ValidationError(
                f"Cannot confirm reservation {self.id}: current status is "
                f"{self.status.value}, expected {ReservationStatus.RESERVED.value}"
            )
        if used < ZERO:
            raise ValidationError("Used quantity cannot be negative")
        if reject_over_use and round2(used) > round2(self.reserved_quantity):
            raise ValidationError(
                f"Used quantity {round2(used)} exceeds the {round2(self.reserved_quantity)} "
                f"reserved on reservation {self.id}"
            )
        self.used_quantity = round2(used)
        self.status = ReservationStatus.CONFIRMED

    def record_return(self, quantity: Decimal) -> None:
        self.returned_quantity = round2(round2(self.returned_quantity) + round2(quantity))
        self.status = ReservationStatus.CANCELLED
