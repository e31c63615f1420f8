"""Application service: Reserve Inventory use cases.

Both handlers run the availability check and the reservation write inside
one transaction, so two requests for the same stock cannot both pass the
check.
"""

from __future__ import annotations

from decimal import Decimal

from agrotic.application.dto import ReservationDTO
from agrotic.application.mapping import reservation_to_dto
from agrotic.domain.exceptions import EntityNotFoundError
from agrotic.domain.model.activity import Activity
from agrotic.domain.repository.activity_repository import ActivityRepository
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.domain.repository.unit_of_work import UnitOfWork
from agrotic.domain.service.reservation_ledger import ReservationLedger


class _ReserveHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        ledger: ReservationLedger,
        activity_repo: ActivityRepository,
        lot_repo: LotRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._uow = uow
        self._ledger = ledger
        self._activity_repo = activity_repo
        self._lot_repo = lot_repo
        self._product_repo = product_repo

    def _activity(self, activity_id: str) -> Activity:
        activity = self._activity_repo.get_by_id(activity_id)
        if activity is None:
            raise EntityNotFoundError(f"Activity {activity_id} not found")
        return activity

    def _to_dto(self, reservation) -> ReservationDTO:
        lot = self._lot_repo.get_by_id(reservation.lot_id)
        product = self._product_repo.get_by_id(lot.product_id) if lot else None
        return reservation_to_dto(reservation, product)


class ReserveLotHandler(_ReserveHandler):

    def handle(self, activity_id: str, lot_id: str, quantity: Decimal) -> ReservationDTO:
        """Reserve a quantity of one specific lot for an activity."""
        with self._uow.transaction():
            activity = self._activity(activity_id)
            reservation = self._ledger.reserve(
                activity.id, lot_id, quantity,
                responsible_dni=activity.responsible_dni,
            )
            return self._to_dto(reservation)


class ReserveProductHandler(_ReserveHandler):

    def handle(self, activity_id: str, product_id: str, quantity: Decimal) -> ReservationDTO:
        """Reserve a quantity of a product from the first lot that can cover it."""
        with self._uow.transaction():
            activity = self._activity(activity_id)
            reservation = self._ledger.reserve_by_product(
                activity.id, product_id, quantity,
                responsible_dni=activity.responsible_dni,
            )
            return self._to_dto(reservation)
