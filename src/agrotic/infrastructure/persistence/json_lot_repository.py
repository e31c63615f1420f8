"""JSON-file-backed implementation of LotRepository."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from agrotic.domain.model.lot import Lot
from agrotic.domain.model.value_objects import to_decimal
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.infrastructure.persistence.json_table import JsonTable


class JsonLotRepository(LotRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    # --- LotRepository interface ----------------------------------------------

    def get_by_id(self, lot_id: str) -> Lot | None:
        for raw in self._table.load_raw():
            if raw["id"] == lot_id:
                return self._to_domain(raw)
        return None

    def list_by_product(self, product_id: str) -> list[Lot]:
        return [
            self._to_domain(raw)
            for raw in self._table.load_raw()
            if raw["product_id"] == product_id
        ]

    def list_all(self) -> list[Lot]:
        return [self._to_domain(raw) for raw in self._table.load_raw()]

    def save(self, lot: Lot) -> None:
        if lot.id is None:
            lot.id = self._table.next_id(self._table.load_raw())
        self._table.upsert(self._to_raw(lot))

    def delete(self, lot_id: str) -> None:
        self._table.delete_where("id", lot_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(lot: Lot) -> dict:
        return {
            "id": lot.id,
            "product_id": lot.product_id,
            "warehouse_id": lot.warehouse_id,
            "stock": str(lot.stock),
            "available_quantity": str(lot.available_quantity),
            "partial_quantity": str(lot.partial_quantity),
            "expires_on": lot.expires_on.isoformat() if lot.expires_on else None,
            "received_at": lot.received_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Lot:
        expires_on = raw.get("expires_on")
        return Lot(
            id=raw["id"],
            product_id=raw["product_id"],
            warehouse_id=raw.get("warehouse_id"),
            stock=to_decimal(raw.get("stock")),
            available_quantity=to_decimal(raw.get("available_quantity")),
            partial_quantity=to_decimal(raw.get("partial_quantity")),
            expires_on=date.fromisoformat(expires_on) if expires_on else None,
            received_at=datetime.fromisoformat(raw["received_at"]),
        )
