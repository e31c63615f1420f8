"""Application service: settle a reservation (confirm usage or cancel it)."""

from __future__ import annotations

from decimal import Decimal

from agrotic.domain.exceptions import ValidationError
from agrotic.domain.model.reservation import ReservationStatus
from agrotic.domain.repository.activity_repository import ActivityRepository
from agrotic.domain.repository.unit_of_work import UnitOfWork
from agrotic.domain.service.reservation_ledger import ReservationLedger


class ConfirmUsageHandler:

    def __init__(self, uow: UnitOfWork, ledger: ReservationLedger) -> None:
        self._uow = uow
        self._ledger = ledger

    def handle(self, reservation_id: str, used_quantity: Decimal) -> None:
        """Record how much of a reservation the activity actually used."""
        with self._uow.transaction():
            self._ledger.confirm_usage(reservation_id, used_quantity)


class CancelReservationHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        ledger: ReservationLedger,
        activity_repo: ActivityRepository,
    ) -> None:
        self._uow = uow
        self._ledger = ledger
        self._activity_repo = activity_repo

    def handle(self, reservation_id: str) -> Decimal:
        """Cancel a reservation, returning its unused part to the partial pool."""
        with self._uow.transaction():
            reservation = self._ledger.get(reservation_id)
            if reservation.status != ReservationStatus.RESERVED:
                raise ValidationError(
                    f"Cannot cancel reservation {reservation_id} in status "
                    f"{reservation.status.value}"
                )
            activity = self._activity_repo.get_by_id(reservation.activity_id)
            return self._ledger.cancel_or_return(
                reservation,
                responsible_dni=activity.responsible_dni if activity else None,
            )
