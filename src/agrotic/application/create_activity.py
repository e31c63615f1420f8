"""Application service: Create Activity use case.

Creating an activity has no inventory side effects; materials are reserved
afterwards through the reservation handlers or a full update.
"""

from __future__ import annotations

from datetime import date

from agrotic.application.dto import ActivityDTO
from agrotic.application.mapping import activity_to_dto
from agrotic.domain.model.activity import Activity
from agrotic.domain.repository.activity_repository import ActivityRepository
from agrotic.domain.repository.unit_of_work import UnitOfWork


class CreateActivityHandler:

    def __init__(self, uow: UnitOfWork, activity_repo: ActivityRepository) -> None:
        self._uow = uow
        self._activity_repo = activity_repo

    def handle(
        self,
        description: str,
        crop_zone_id: str,
        category_id: str,
        assigned_on: date,
        responsible_dni: int,
    ) -> ActivityDTO:
        activity = Activity.create(
            description=description,
            crop_zone_id=crop_zone_id,
            category_id=category_id,
            assigned_on=assigned_on,
            responsible_dni=responsible_dni,
        )
        with self._uow.transaction():
            self._activity_repo.save(activity)
        return activity_to_dto(activity)
