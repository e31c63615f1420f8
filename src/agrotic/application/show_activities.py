"""Application service: activity queries.

Every listing carries the responsible user's display name, resolved
through the user directory. Finalized activities listed by crop zone also
carry their cost report.
"""

from __future__ import annotations

import logging
from datetime import date

from agrotic.application.activity_cost import ActivityCostHandler
from agrotic.application.dto import ActivityDTO
from agrotic.application.mapping import activity_to_dto, cost_to_dto, reservation_to_dto
from agrotic.domain.exceptions import EntityNotFoundError, ValidationError
from agrotic.domain.model.activity import Activity
from agrotic.domain.repository.activity_repository import ActivityRepository
from agrotic.domain.repository.directories import UserDirectory
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.domain.service.reservation_ledger import ReservationLedger

logger = logging.getLogger(__name__)


class ShowActivitiesHandler:

    def __init__(
        self,
        activity_repo: ActivityRepository,
        users: UserDirectory,
        ledger: ReservationLedger,
        lot_repo: LotRepository,
        product_repo: ProductRepository,
        cost_handler: ActivityCostHandler,
    ) -> None:
        self._activity_repo = activity_repo
        self._users = users
        self._ledger = ledger
        self._lot_repo = lot_repo
        self._product_repo = product_repo
        self._cost_handler = cost_handler

    def find(self, activity_id: str) -> ActivityDTO:
        """One activity with its reservations."""
        activity = self._activity_repo.get_by_id(activity_id)
        if activity is None:
            raise EntityNotFoundError(f"Activity {activity_id} not found")

        reservations = []
        for reservation in self._ledger.list_by_activity(activity_id):
            lot = self._lot_repo.get_by_id(reservation.lot_id)
            product = self._product_repo.get_by_id(lot.product_id) if lot else None
            reservations.append(reservation_to_dto(reservation, product))

        return activity_to_dto(
            activity,
            responsible_name=self._responsible_name(activity),
            reservations=reservations,
        )

    def by_date(self, day: date) -> list[ActivityDTO]:
        return self._listing(
            a for a in self._activity_repo.list_all()
            if a.active and a.assigned_on == day
        )

    def by_date_range(self, start: date, end: date) -> list[ActivityDTO]:
        if start > end:
            raise ValidationError("Start date must not be after end date")
        return self._listing(
            a for a in self._activity_repo.list_all()
            if a.active and start <= a.assigned_on <= end
        )

    def count_by_date(self, day: date) -> int:
        return sum(1 for a in self._activity_repo.list_all() if a.assigned_on == day)

    def by_crop_zone(self, crop_zone_id: str) -> list[ActivityDTO]:
        """Activities of a crop zone, newest first, costed once finalized."""
        activities = sorted(
            (a for a in self._activity_repo.list_all() if a.crop_zone_id == crop_zone_id),
            key=lambda a: a.assigned_on,
            reverse=True,
        )
        result = []
        for activity in activities:
            cost = None
            if not activity.active:
                cost = cost_to_dto(activity.id, self._cost_handler.compute(activity))
            result.append(
                activity_to_dto(
                    activity,
                    responsible_name=self._responsible_name(activity),
                    cost=cost,
                )
            )
        return result

    # --- Internal helpers -----------------------------------------------------

    def _listing(self, activities) -> list[ActivityDTO]:
        return [
            activity_to_dto(a, responsible_name=self._responsible_name(a))
            for a in activities
        ]

    def _responsible_name(self, activity: Activity) -> str | None:
        try:
            user = self._users.get_by_dni(activity.responsible_dni)
        except Exception:
            logger.exception(
                "Responsible lookup failed for activity %s", activity.id
            )
            return None
        return user.full_name if user is not None else None
