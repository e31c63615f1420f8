"""Domain service: Reservation Ledger.

Commits lot quantity to activities, confirms usage and returns what was not
used. Every stock-affecting step writes a movement through the Movement Log.

Availability is read and the reservation row is written in the same call,
so callers must run these methods inside a unit-of-work transaction to keep
the check and the write from interleaving with another request.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from agrotic.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from agrotic.domain.model.movement import MovementKind
from agrotic.domain.model.reservation import Reservation, ReservationStatus
from agrotic.domain.model.value_objects import ZERO, round2, to_decimal
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.domain.repository.reservation_repository import ReservationRepository
from agrotic.domain.service.lot_store import LotStore
from agrotic.domain.service.movement_log import MovementLog

logger = logging.getLogger(__name__)


class ReservationLedger:

    def __init__(
        self,
        reservation_repo: ReservationRepository,
        lot_repo: LotRepository,
        product_repo: ProductRepository,
        lot_store: LotStore,
        movement_log: MovementLog,
        reject_over_use: bool = False,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._lot_repo = lot_repo
        self._product_repo = product_repo
        self._lot_store = lot_store
        self._movement_log = movement_log
        self._reject_over_use = reject_over_use

    # --- Reserving ------------------------------------------------------------

    def reserve(
        self,
        activity_id: str,
        lot_id: str,
        quantity: Decimal,
        status: ReservationStatus = ReservationStatus.RESERVED,
        responsible_dni: int | None = None,
    ) -> Reservation:
        """Reserve ``quantity`` units of a specific lot for an activity.

        The product's presentation capacity and price are copied onto the
        reservation so later catalog changes do not alter its cost.
        """
        quantity = round2(quantity)
        if quantity <= ZERO:
            raise ValidationError("Reservation quantity must be positive")

        lot = self._lot_repo.get_by_id(lot_id)
        product = self._product_repo.get_by_id(lot.product_id) if lot else None
        if lot is None or product is None:
            raise EntityNotFoundError(f"Lot {lot_id} not found or has no product")

        available = self._lot_store.available_quantity(lot)
        if quantity > available:
            raise InsufficientStockError(
                f"Not enough stock in lot {lot_id} "
                f"(need {quantity}, have {available} available)"
            )

        reservation = Reservation(
            id=None,
            activity_id=activity_id,
            lot_id=lot.id,
            reserved_quantity=quantity,
            presentation_capacity=product.presentation_capacity,
            unit_price=product.purchase_price,
            status=status,
        )
        self._reservation_repo.save(reservation)
        logger.info(
            "Reserved %s of lot %s for activity %s (reservation %s)",
            quantity, lot.id, activity_id, reservation.id,
        )

        self._movement_log.record(
            lot_id=lot.id,
            kind=MovementKind.RESERVATION,
            quantity=quantity,
            note="Reservation for field activity",
            reservation_id=reservation.id,
            responsible_dni=responsible_dni,
        )
        return reservation

    def reserve_by_product(
        self,
        activity_id: str,
        product_id: str,
        quantity: Decimal,
        status: ReservationStatus = ReservationStatus.RESERVED,
        responsible_dni: int | None = None,
    ) -> Reservation:
        """Reserve against the first lot of the product that can cover it.

        First-fit in storage order, not best-fit.
        """
        quantity = round2(quantity)
        for lot in self._lot_repo.list_by_product(product_id):
            if self._lot_store.available_quantity(lot) >= quantity:
                return self.reserve(
                    activity_id, lot.id, quantity, status, responsible_dni
                )
        raise InsufficientStockError(
            f"Not enough stock available for product {product_id}"
        )

    # --- Settling -------------------------------------------------------------

    def confirm_usage(self, reservation_id: str, used_quantity: Decimal) -> Reservation:
        """Record the quantity actually used and mark the reservation confirmed.

        The lot is not touched: confirmation only settles the ledger row.
        """
        reservation = self.get(reservation_id)
        reservation.confirm_usage(
            to_decimal(used_quantity), reject_over_use=self._reject_over_use
        )
        self._reservation_repo.save(reservation)
        logger.info(
            "Reservation %s confirmed: %s of %s used",
            reservation.id, reservation.used_quantity, reservation.reserved_quantity,
        )
        return reservation

    def cancel_or_return(
        self, reservation: Reservation, responsible_dni: int | None = None
    ) -> Decimal:
        """Push the unused part of a reservation into the lot's partial pool.

        Returns the quantity given back (0 when nothing was left over).
        """
        to_return = reservation.returnable_quantity
        if to_return <= ZERO:
            return ZERO

        lot = self._lot_store.get(reservation.lot_id)
        lot.return_to_partial(to_return)
        reservation.record_return(to_return)
        self._lot_repo.save(lot)
        self._reservation_repo.save(reservation)
        logger.info(
            "Returned %s to lot %s from reservation %s",
            to_return, lot.id, reservation.id,
        )

        self._movement_log.record(
            lot_id=lot.id,
            kind=MovementKind.RETURN,
            quantity=to_return,
            note="Return after removing field activity",
            reservation_id=reservation.id,
            responsible_dni=responsible_dni,
        )
        return to_return

    def update_quantity(self, reservation_id: str, quantity: Decimal) -> Reservation:
        """Change the committed quantity; increases must fit the lot."""
        reservation = self.get(reservation_id)
        quantity = round2(quantity)
        increase = round2(quantity - round2(reservation.reserved_quantity))
        if increase > ZERO:
            lot = self._lot_store.get(reservation.lot_id)
            available = self._lot_store.available_quantity(lot)
            if increase > available:
                raise InsufficientStockError(
                    f"Not enough stock in lot {lot.id} "
                    f"(need {increase} more, have {available} available)"
                )
        reservation.change_quantity(quantity)
        self._reservation_repo.save(reservation)
        return reservation

    # --- Rows -----------------------------------------------------------------

    def get(self, reservation_id: str) -> Reservation:
        reservation = self._reservation_repo.get_by_id(reservation_id)
        if reservation is None:
            raise EntityNotFoundError(f"Reservation {reservation_id} not found")
        return reservation

    def list_by_activity(self, activity_id: str) -> list[Reservation]:
        return self._reservation_repo.list_by_activity(activity_id)

    def remove(self, reservation_id: str) -> None:
        self.get(reservation_id)
        self._reservation_repo.delete(reservation_id)
