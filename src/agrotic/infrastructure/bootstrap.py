"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from agrotic.config import settings
from agrotic.domain.service.lot_store import LotStore
from agrotic.domain.service.movement_log import MovementLog
from agrotic.domain.service.reservation_ledger import ReservationLedger
from agrotic.domain.service.state_catalog import ReservationStateCatalog
from agrotic.infrastructure.notifier import LoggingMovementNotifier
from agrotic.infrastructure.persistence.json_activity_repository import (
    JsonActivityRepository,
    JsonAssignmentRepository,
)
from agrotic.infrastructure.persistence.json_directories import (
    JsonMovementTypeDirectory,
    JsonReservationStateTable,
    JsonUserDirectory,
)
from agrotic.infrastructure.persistence.json_lot_repository import JsonLotRepository
from agrotic.infrastructure.persistence.json_movement_repository import (
    JsonMovementRepository,
)
from agrotic.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from agrotic.infrastructure.persistence.json_reservation_repository import (
    JsonReservationRepository,
)
from agrotic.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def _data_dir() -> Path:
    return Path(settings.data_dir)


# --- Repositories -------------------------------------------------------------


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(_data_dir() / "products.json")


def lot_repository() -> JsonLotRepository:
    return JsonLotRepository(_data_dir() / "lots.json")


def state_catalog() -> ReservationStateCatalog:
    """Resolved on every wiring; a missing state fails before any command runs."""
    table = JsonReservationStateTable(_data_dir() / "reservation_states.json")
    return ReservationStateCatalog.from_table(table)


def reservation_repository() -> JsonReservationRepository:
    return JsonReservationRepository(_data_dir() / "reservations.json", state_catalog())


def movement_repository() -> JsonMovementRepository:
    return JsonMovementRepository(_data_dir() / "movements.json")


def activity_repository() -> JsonActivityRepository:
    return JsonActivityRepository(_data_dir() / "activities.json")


def assignment_repository() -> JsonAssignmentRepository:
    return JsonAssignmentRepository(_data_dir() / "assignments.json")


def user_directory() -> JsonUserDirectory:
    return JsonUserDirectory(_data_dir() / "users.json")


def unit_of_work() -> JsonUnitOfWork:
    return JsonUnitOfWork(_data_dir())


# --- Domain services ----------------------------------------------------------


def movement_log() -> MovementLog:
    return MovementLog(
        movement_repo=movement_repository(),
        movement_types=JsonMovementTypeDirectory(_data_dir() / "movement_types.json"),
        users=user_directory(),
        notifier=LoggingMovementNotifier(),
    )


def lot_store() -> LotStore:
    return LotStore(
        lot_repo=lot_repository(),
        product_repo=product_repository(),
        reservation_repo=reservation_repository(),
        movement_repo=movement_repository(),
        movement_log=movement_log(),
    )


def reservation_ledger() -> ReservationLedger:
    store = lot_store()
    return ReservationLedger(
        reservation_repo=reservation_repository(),
        lot_repo=lot_repository(),
        product_repo=product_repository(),
        lot_store=store,
        movement_log=movement_log(),
        reject_over_use=settings.reject_over_use,
    )
