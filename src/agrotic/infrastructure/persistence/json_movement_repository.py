"""JSON-file-backed implementation of MovementRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from agrotic.domain.model.movement import Movement
from agrotic.domain.model.value_objects import to_decimal
from agrotic.domain.repository.movement_repository import MovementRepository
from agrotic.infrastructure.persistence.json_table import JsonTable


class JsonMovementRepository(MovementRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def add(self, movement: Movement) -> None:
        rows = self._table.load_raw()
        movement.id = self._table.next_id(rows)
        rows.append(self._to_raw(movement))
        self._table.persist_raw(rows)

    def list_by_lot(self, lot_id: str) -> list[Movement]:
        return [
            self._to_domain(raw)
            for raw in self._table.load_raw()
            if raw["lot_id"] == lot_id
        ]

    def delete_by_lot(self, lot_id: str) -> None:
        self._table.delete_where("lot_id", lot_id)

    @staticmethod
    def _to_raw(movement: Movement) -> dict:
        return {
            "id": movement.id,
            "lot_id": movement.lot_id,
            "type_id": movement.type_id,
            "type_name": movement.type_name,
            "quantity": str(movement.quantity),
            "note": movement.note,
            "reservation_id": movement.reservation_id,
            "responsible": movement.responsible,
            "created_at": movement.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Movement:
        return Movement(
            id=raw["id"],
            lot_id=raw["lot_id"],
            type_id=raw["type_id"],
            type_name=raw["type_name"],
            quantity=to_decimal(raw["quantity"]),
            note=raw["note"],
            reservation_id=raw.get("reservation_id"),
            responsible=raw.get("responsible"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
