"""Application service: Update Lot use case.

Stock and expiry edits are refused while the lot backs an active
reservation. Every effective update leaves an adjustment movement.
"""

from __future__ import annotations

from agrotic.application.dto import LotDTO
from agrotic.application.mapping import lot_to_dto
from agrotic.domain.repository.unit_of_work import UnitOfWork
from agrotic.domain.service.lot_store import LotPatch, LotStore


class UpdateLotHandler:

    def __init__(self, uow: UnitOfWork, lot_store: LotStore) -> None:
        self._uow = uow
        self._lot_store = lot_store

    def handle(self, lot_id: str, patch: LotPatch, acting_dni: int | None = None) -> LotDTO:
        with self._uow.transaction():
            lot = self._lot_store.update(lot_id, patch, acting_dni)
        return lot_to_dto(lot)
