"""Application service: Finalize Activity use case."""

from __future__ import annotations

from decimal import Decimal

from agrotic.domain.exceptions import EntityNotFoundError
from agrotic.domain.repository.activity_repository import ActivityRepository
from agrotic.domain.repository.unit_of_work import UnitOfWork


class FinalizeActivityHandler:

    def __init__(self, uow: UnitOfWork, activity_repo: ActivityRepository) -> None:
        self._uow = uow
        self._activity_repo = activity_repo

    def handle(
        self,
        activity_id: str,
        observation: str | None = None,
        photo_url: str | None = None,
        hours: Decimal | None = None,
        hourly_rate: Decimal | None = None,
        acting_dni: int | None = None,
    ) -> None:
        """Close an activity.

        Reservations are untouched; usage is confirmed per reservation.
        """
        with self._uow.transaction():
            activity = self._activity_repo.get_by_id(activity_id)
            if activity is None:
                raise EntityNotFoundError(f"Activity {activity_id} not found")
            activity.finalize(observation, photo_url, hours, hourly_rate, acting_dni)
            self._activity_repo.save(activity)
