"""JSON-file-backed implementation of ReservationRepository.

Rows store the reservation state by its lookup-table id, not by name.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from agrotic.domain.model.reservation import Reservation
from agrotic.domain.model.value_objects import Money, to_decimal
from agrotic.domain.repository.reservation_repository import ReservationRepository
from agrotic.domain.service.state_catalog import ReservationStateCatalog
from agrotic.infrastructure.persistence.json_table import JsonTable


class JsonReservationRepository(ReservationRepository):

    def __init__(self, file_path: Path, states: ReservationStateCatalog) -> None:
        self._table = JsonTable(file_path)
        self._states = states

    # --- ReservationRepository interface --------------------------------------

    def get_by_id(self, reservation_id: str) -> Reservation | None:
        for raw in self._table.load_raw():
            if raw["id"] == reservation_id:
                return self._to_domain(raw)
        return None

    def list_by_activity(self, activity_id: str) -> list[Reservation]:
        return self._where("activity_id", activity_id)

    def list_by_lot(self, lot_id: str) -> list[Reservation]:
        return self._where("lot_id", lot_id)

    def list_all(self) -> list[Reservation]:
        return [self._to_domain(raw) for raw in self._table.load_raw()]

    def save(self, reservation: Reservation) -> None:
        if reservation.id is None:
            reservation.id = self._table.next_id(self._table.load_raw())
        self._table.upsert(self._to_raw(reservation))

    def delete(self, reservation_id: str) -> None:
        self._table.delete_where("id", reservation_id)

    def delete_by_lot(self, lot_id: str) -> None:
        self._table.delete_where("lot_id", lot_id)

    # --- Serialization --------------------------------------------------------

    def _where(self, key: str, value: str) -> list[Reservation]:
        return [self._to_domain(raw) for raw in self._table.load_raw() if raw[key] == value]

    def _to_raw(self, reservation: Reservation) -> dict:
        return {
            "id": reservation.id,
            "activity_id": reservation.activity_id,
            "lot_id": reservation.lot_id,
            "state_id": self._states.id_for(reservation.status),
            "reserved_quantity": str(reservation.reserved_quantity),
            "used_quantity": (
                str(reservation.used_quantity)
                if reservation.used_quantity is not None
                else None
            ),
            "returned_quantity": str(reservation.returned_quantity),
            "presentation_capacity": (
                str(reservation.presentation_capacity)
                if reservation.presentation_capacity is not None
                else None
            ),
            "unit_price": str(reservation.unit_price.amount),
            "currency": reservation.unit_price.currency,
        }

    def _to_domain(self, raw: dict) -> Reservation:
        used = raw.get("used_quantity")
        capacity = raw.get("presentation_capacity")
        return Reservation(
            id=raw["id"],
            activity_id=raw["activity_id"],
            lot_id=raw["lot_id"],
            reserved_quantity=to_decimal(raw["reserved_quantity"]),
            presentation_capacity=Decimal(capacity) if capacity is not None else None,
            unit_price=Money(to_decimal(raw["unit_price"]), raw.get("currency", "COP")),
            status=self._states.status_for(raw["state_id"]),
            used_quantity=Decimal(used) if used is not None else None,
            returned_quantity=to_decimal(raw.get("returned_quantity")),
        )
