"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class MaterialSpec:
    """Input: a product and the quantity an activity needs of it."""

    product_id: str
    quantity: Decimal


@dataclass(frozen=True)
class ItemResult:
    """Outcome of one step in a per-item loop that must not abort."""

    item_id: str
    ok: bool
    error: str | None = None


@dataclass
class RemovalReport:
    """What happened while cascading an activity deletion."""

    activity_id: str
    returns: list[ItemResult] = field(default_factory=list)
    deleted_reservations: list[ItemResult] = field(default_factory=list)
    deleted_assignments: list[ItemResult] = field(default_factory=list)

    @property
    def failures(self) -> list[ItemResult]:
        return [
            result
            for result in (*self.returns, *self.deleted_reservations, *self.deleted_assignments)
            if not result.ok
        ]


@dataclass(frozen=True)
class LotDTO:
    id: str
    product_id: str
    warehouse_id: str | None
    stock: str
    available_quantity: str
    partial_quantity: str
    expires_on: str | None


@dataclass(frozen=True)
class LotLineDTO:
    """A lot as listed on the paginated inventory screen."""

    id: str
    product_name: str
    stock: str
    stock_total: str
    reservable: str
    reserved: str
    unit: str


@dataclass(frozen=True)
class ProductAvailabilityDTO:
    id: str
    name: str
    sku: str | None
    purchase_price: str
    divisible: bool
    presentation_capacity: str | None
    unit: str
    available: str
    returned: str
    has_returns: bool
    lot_ids: list[str]


@dataclass(frozen=True)
class ReservationDTO:
    id: str
    lot_id: str
    product_name: str
    status: str
    reserved: str
    used: str | None
    returned: str
    unit_price: str


@dataclass(frozen=True)
class CostLineDTO:
    reservation_id: str
    product_name: str
    used: str
    unit_price: str
    subtotal: str


@dataclass(frozen=True)
class CostReportDTO:
    activity_id: str
    lines: list[CostLineDTO]
    inputs_cost: str
    labor_cost: str
    total_cost: str


@dataclass(frozen=True)
class ActivityDTO:
    id: str
    description: str
    crop_zone_id: str
    category_id: str
    assigned_on: str
    responsible_dni: int
    responsible_name: str | None
    status: str
    finished_at: str | None
    reservations: list[ReservationDTO] = field(default_factory=list)
    cost: CostReportDTO | None = None


def fmt(value: Decimal | None) -> str | None:
    """Two-decimal display form; None stays None."""
    if value is None:
        return None
    return f"{value:.2f}"
