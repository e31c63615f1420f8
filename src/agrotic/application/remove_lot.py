"""Application service: Remove Lot use case."""

from __future__ import annotations

from agrotic.domain.repository.unit_of_work import UnitOfWork
from agrotic.domain.service.lot_store import LotStore


class RemoveLotHandler:

    def __init__(self, uow: UnitOfWork, lot_store: LotStore) -> None:
        self._uow = uow
        self._lot_store = lot_store

    def handle(self, lot_id: str) -> None:
        with self._uow.transaction():
            self._lot_store.remove(lot_id)
