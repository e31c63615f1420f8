"""Application service: Create Lot use case."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from agrotic.application.dto import LotDTO
from agrotic.application.mapping import lot_to_dto
from agrotic.domain.repository.unit_of_work import UnitOfWork
from agrotic.domain.service.lot_store import LotStore


class CreateLotHandler:

    def __init__(self, uow: UnitOfWork, lot_store: LotStore) -> None:
        self._uow = uow
        self._lot_store = lot_store

    def handle(
        self,
        product_id: str,
        warehouse_id: str | None,
        stock: Decimal,
        expires_on: date | None = None,
    ) -> LotDTO:
        """Receive stock into a new lot."""
        with self._uow.transaction():
            lot = self._lot_store.create(product_id, warehouse_id, stock, expires_on)
        return lot_to_dto(lot)
