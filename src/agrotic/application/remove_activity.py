"""Application service: Remove Activity use case.

The cascade runs in two lanes. Loading and finally deleting the activity
are the primary path: failures propagate and roll the transaction back.
Returning each reservation to stock and deleting each dependent row are
per-item steps: a failure is captured as an ``ItemResult``, logged, and the
loop moves on to the next item.
"""

from __future__ import annotations

import logging
from typing import Callable

from agrotic.application.dto import ItemResult, RemovalReport
from agrotic.domain.exceptions import EntityNotFoundError
from agrotic.domain.model.reservation import ReservationStatus
from agrotic.domain.repository.activity_repository import (
    ActivityRepository,
    AssignmentRepository,
)
from agrotic.domain.repository.unit_of_work import UnitOfWork
from agrotic.domain.service.reservation_ledger import ReservationLedger

logger = logging.getLogger(__name__)


def _attempt(item_id: str, step: Callable[[], object]) -> ItemResult:
    try:
        step()
    except Exception as exc:
        return ItemResult(item_id=item_id, ok=False, error=str(exc) or type(exc).__name__)
    return ItemResult(item_id=item_id, ok=True)


class RemoveActivityHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        activity_repo: ActivityRepository,
        assignment_repo: AssignmentRepository,
        ledger: ReservationLedger,
    ) -> None:
        self._uow = uow
        self._activity_repo = activity_repo
        self._assignment_repo = assignment_repo
        self._ledger = ledger

    def handle(self, activity_id: str) -> RemovalReport:
        """Delete an activity, returning unconfirmed reservations to stock.

        Steps:
        1. Load the activity's reservations.
        2. Return the unused part of every unconfirmed reservation to the
           lot's partial pool.
        3. Delete every reservation row.
        4. Delete every user assignment.
        5. Delete the activity itself.
        """
        report = RemovalReport(activity_id=activity_id)

        with self._uow.transaction():
            activity = self._activity_repo.get_by_id(activity_id)
            if activity is None:
                raise EntityNotFoundError(f"Activity {activity_id} not found")

            reservations = self._ledger.list_by_activity(activity_id)

            for reservation in reservations:
                if reservation.status == ReservationStatus.CONFIRMED:
                    continue
                report.returns.append(
                    _attempt(
                        reservation.id,
                        lambda r=reservation: self._ledger.cancel_or_return(
                            r, responsible_dni=activity.responsible_dni
                        ),
                    )
                )

            for reservation in reservations:
                report.deleted_reservations.append(
                    _attempt(reservation.id, lambda r=reservation: self._ledger.remove(r.id))
                )

            for assignment in self._assignment_repo.list_by_activity(activity_id):
                report.deleted_assignments.append(
                    _attempt(
                        assignment.id,
                        lambda a=assignment: self._assignment_repo.delete(a.id),
                    )
                )

            self._activity_repo.delete(activity_id)

        for failure in report.failures:
            logger.warning(
                "Activity %s removal: step for %s failed: %s",
                activity_id, failure.item_id, failure.error,
            )
        logger.info(
            "Activity %s removed (%d reservations, %d failed steps)",
            activity_id, len(report.deleted_reservations), len(report.failures),
        )
        return report
