"""Application service: Show Reservations use case (query)."""

from __future__ import annotations

from agrotic.application.dto import ReservationDTO
from agrotic.application.mapping import reservation_to_dto
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.domain.service.reservation_ledger import ReservationLedger


class ShowReservationsHandler:

    def __init__(
        self,
        ledger: ReservationLedger,
        lot_repo: LotRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._ledger = ledger
        self._lot_repo = lot_repo
        self._product_repo = product_repo

    def handle(self, activity_id: str) -> list[ReservationDTO]:
        result: list[ReservationDTO] = []
        for reservation in self._ledger.list_by_activity(activity_id):
            lot = self._lot_repo.get_by_id(reservation.lot_id)
            product = self._product_repo.get_by_id(lot.product_id) if lot else None
            result.append(reservation_to_dto(reservation, product))
        return result
