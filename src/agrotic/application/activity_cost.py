"""Application service: Activity Cost query.

Costs are computed over confirmed reservations only: anything still
reserved has no recorded usage, and cancelled rows went back to stock.
"""

from __future__ import annotations

from agrotic.application.dto import CostReportDTO
from agrotic.application.mapping import cost_to_dto
from agrotic.domain.exceptions import EntityNotFoundError
from agrotic.domain.model.activity import Activity
from agrotic.domain.model.product import Product
from agrotic.domain.model.reservation import ReservationStatus
from agrotic.domain.repository.activity_repository import ActivityRepository
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.domain.service.cost_calculator import ActivityCost, calculate_activity_cost
from agrotic.domain.service.reservation_ledger import ReservationLedger


class ActivityCostHandler:

    def __init__(
        self,
        activity_repo: ActivityRepository,
        ledger: ReservationLedger,
        lot_repo: LotRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._activity_repo = activity_repo
        self._ledger = ledger
        self._lot_repo = lot_repo
        self._product_repo = product_repo

    def handle(self, activity_id: str) -> CostReportDTO:
        activity = self._activity_repo.get_by_id(activity_id)
        if activity is None:
            raise EntityNotFoundError(f"Activity {activity_id} not found")
        return cost_to_dto(activity_id, self.compute(activity))

    def compute(self, activity: Activity) -> ActivityCost:
        reservations = [
            r for r in self._ledger.list_by_activity(activity.id)
            if r.status == ReservationStatus.CONFIRMED
        ]
        products_by_lot: dict[str, Product] = {}
        for reservation in reservations:
            lot = self._lot_repo.get_by_id(reservation.lot_id)
            product = self._product_repo.get_by_id(lot.product_id) if lot else None
            if product is not None:
                products_by_lot[reservation.lot_id] = product
        return calculate_activity_cost(
            reservations,
            products_by_lot,
            hours_worked=activity.hours_worked,
            hourly_rate=activity.hourly_rate,
        )
