"""JSON-file-backed lookup tables: users, movement types, reservation states.

The two lookup tables are seeded with the names the core expects the first
time they are opened empty.
"""

from __future__ import annotations

from pathlib import Path

from agrotic.domain.model.movement import MovementKind, MovementType
from agrotic.domain.model.reservation import ReservationStatus
from agrotic.domain.model.user import User
from agrotic.domain.repository.directories import (
    MovementTypeDirectory,
    ReservationStateTable,
    UserDirectory,
)
from agrotic.infrastructure.persistence.json_table import JsonTable

MOVEMENT_TYPE_SEED = [
    {"id": str(i), "name": kind.value} for i, kind in enumerate(MovementKind, start=1)
]
RESERVATION_STATE_SEED = [
    {"id": str(i), "name": status.value} for i, status in enumerate(ReservationStatus, start=1)
]


class JsonUserDirectory(UserDirectory):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def get_by_dni(self, dni: int) -> User | None:
        for raw in self._table.load_raw():
            if int(raw["dni"]) == dni:
                return User(
                    id=raw["id"],
                    dni=int(raw["dni"]),
                    first_names=raw["first_names"],
                    last_names=raw["last_names"],
                )
        return None


class JsonMovementTypeDirectory(MovementTypeDirectory):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path, seed=MOVEMENT_TYPE_SEED)

    def get_by_name(self, name: str) -> MovementType | None:
        for raw in self._table.load_raw():
            if raw["name"] == name:
                return MovementType(id=raw["id"], name=raw["name"])
        return None


class JsonReservationStateTable(ReservationStateTable):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path, seed=RESERVATION_STATE_SEED)

    def load(self) -> dict[str, str]:
        return {raw["name"]: str(raw["id"]) for raw in self._table.load_raw()}
