"""Domain -> DTO mapping shared by the query and command handlers."""

from __future__ import annotations

from agrotic.application.dto import (
    ActivityDTO,
    CostLineDTO,
    CostReportDTO,
    LotDTO,
    ReservationDTO,
    fmt,
)
from agrotic.domain.model.activity import Activity
from agrotic.domain.model.lot import Lot
from agrotic.domain.model.product import Product
from agrotic.domain.model.reservation import Reservation
from agrotic.domain.model.value_objects import to_decimal
from agrotic.domain.service.cost_calculator import ActivityCost


def lot_to_dto(lot: Lot) -> LotDTO:
    return LotDTO(
        id=lot.id,  # type: ignore[arg-type]
        product_id=lot.product_id,
        warehouse_id=lot.warehouse_id,
        stock=fmt(lot.stock),
        available_quantity=fmt(lot.available_quantity),
        partial_quantity=fmt(lot.partial_quantity),
        expires_on=lot.expires_on.isoformat() if lot.expires_on else None,
    )


def reservation_to_dto(reservation: Reservation, product: Product | None) -> ReservationDTO:
    return ReservationDTO(
        id=reservation.id,  # type: ignore[arg-type]
        lot_id=reservation.lot_id,
        product_name=product.name if product else "?",
        status=reservation.status.value,
        reserved=fmt(reservation.reserved_quantity),
        used=fmt(reservation.used_quantity),
        returned=fmt(reservation.returned_quantity),
        unit_price=str(reservation.unit_price),
    )


def cost_to_dto(activity_id: str, cost: ActivityCost) -> CostReportDTO:
    return CostReportDTO(
        activity_id=activity_id,
        lines=[
            CostLineDTO(
                reservation_id=line.reservation.id,  # type: ignore[arg-type]
                product_name=line.product.name if line.product else "?",
                used=fmt(to_decimal(line.reservation.used_quantity)),
                unit_price=fmt(line.unit_price),
                subtotal=fmt(line.subtotal),
            )
            for line in cost.lines
        ],
        inputs_cost=fmt(cost.inputs_cost),
        labor_cost=fmt(cost.labor_cost),
        total_cost=fmt(cost.total_cost),
    )


def activity_to_dto(
    activity: Activity,
    responsible_name: str | None = None,
    reservations: list[ReservationDTO] | None = None,
    cost: CostReportDTO | None = None,
) -> ActivityDTO:
    return ActivityDTO(
        id=activity.id,  # type: ignore[arg-type]
        description=activity.description,
        crop_zone_id=activity.crop_zone_id,
        category_id=activity.category_id,
        assigned_on=activity.assigned_on.isoformat(),
        responsible_dni=activity.responsible_dni,
        responsible_name=responsible_name,
        status="ACTIVE" if activity.active else "FINALIZED",
        finished_at=(
            activity.finished_at.strftime("%Y-%m-%d %H:%M UTC")
            if activity.finished_at
            else None
        ),
        reservations=list(reservations or []),
        cost=cost,
    )
