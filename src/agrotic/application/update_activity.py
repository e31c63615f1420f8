"""Application service: Update Activity use cases.

``UpdateActivityHandler`` is a plain shallow merge. ``UpdateActivityFullHandler``
also reconciles the assigned users and the reserved materials against the
lists it is given.
"""

from __future__ import annotations

from datetime import date

from agrotic.application.dto import ActivityDTO, MaterialSpec
from agrotic.application.mapping import activity_to_dto
from agrotic.domain.exceptions import EntityNotFoundError
from agrotic.domain.model.activity import Activity, Assignment
from agrotic.domain.model.reservation import Reservation
from agrotic.domain.repository.activity_repository import (
    ActivityRepository,
    AssignmentRepository,
)
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.domain.repository.unit_of_work import UnitOfWork
from agrotic.domain.service.reservation_ledger import ReservationLedger


def _load(activity_repo: ActivityRepository, activity_id: str) -> Activity:
    activity = activity_repo.get_by_id(activity_id)
    if activity is None:
        raise EntityNotFoundError(f"Activity {activity_id} not found")
    return activity


class UpdateActivityHandler:

    def __init__(self, uow: UnitOfWork, activity_repo: ActivityRepository) -> None:
        self._uow = uow
        self._activity_repo = activity_repo

    def handle(self, activity_id: str, changes: dict) -> ActivityDTO:
        with self._uow.transaction():
            activity = _load(self._activity_repo, activity_id)
            activity.apply(changes)
            self._activity_repo.save(activity)
        return activity_to_dto(activity)


class UpdateActivityFullHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        activity_repo: ActivityRepository,
        assignment_repo: AssignmentRepository,
        lot_repo: LotRepository,
        ledger: ReservationLedger,
    ) -> None:
        self._uow = uow
        self._activity_repo = activity_repo
        self._assignment_repo = assignment_repo
        self._lot_repo = lot_repo
        self._ledger = ledger

    def handle(
        self,
        activity_id: str,
        description: str | None = None,
        crop_zone_id: str | None = None,
        category_id: str | None = None,
        assigned_on: date | None = None,
        user_ids: list[str] | None = None,
        materials: list[MaterialSpec] | None = None,
    ) -> ActivityDTO:
        """Update an activity along with its users and reserved materials.

        Steps:
        1. Merge the scalar fields that were given.
        2. Diff assigned users: drop the missing, add the new.
        3. Diff reservations by product: update the quantity of existing
           ones, reserve newly listed products, delete the rest.
        """
        with self._uow.transaction():
            activity = _load(self._activity_repo, activity_id)
            changes = {
                "description": description,
                "crop_zone_id": crop_zone_id,
                "category_id": category_id,
                "assigned_on": assigned_on,
            }
            activity.apply({k: v for k, v in changes.items() if v})

            self._sync_users(activity_id, user_ids or [])
            self._sync_materials(activity, materials or [])

            self._activity_repo.save(activity)
        return activity_to_dto(activity)

    # --- Internal helpers -----------------------------------------------------

    def _sync_users(self, activity_id: str, user_ids: list[str]) -> None:
        current = self._assignment_repo.list_by_activity(activity_id)
        current_ids = {a.user_id for a in current}
        wanted = list(dict.fromkeys(user_ids))

        for assignment in current:
            if assignment.user_id not in wanted:
                self._assignment_repo.delete(assignment.id)
        for user_id in wanted:
            if user_id not in current_ids:
                self._assignment_repo.add(
                    Assignment(id=None, activity_id=activity_id, user_id=user_id)
                )

    def _sync_materials(self, activity: Activity, materials: list[MaterialSpec]) -> None:
        by_product: dict[str, Reservation] = {}
        for reservation in self._ledger.list_by_activity(activity.id):
            lot = self._lot_repo.get_by_id(reservation.lot_id)
            if lot is None:
                continue
            # An open reservation wins over settled ones for the same product.
            current = by_product.get(lot.product_id)
            if current is None or current.is_terminal:
                by_product[lot.product_id] = reservation

        for material in materials:
            existing = by_product.pop(material.product_id, None)
            if existing is not None:
                if not existing.is_terminal:
                    self._ledger.update_quantity(existing.id, material.quantity)
            else:
                self._ledger.reserve_by_product(
                    activity.id, material.product_id, material.quantity,
                    responsible_dni=activity.responsible_dni,
                )

        # Whatever is left was dropped from the material list. Settled rows
        # stay as cost history.
        for reservation in by_product.values():
            if not reservation.is_terminal:
                self._ledger.remove(reservation.id)
