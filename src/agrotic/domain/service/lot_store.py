"""Domain service: Lot Store.

Owns the physical inventory lots and the real-time availability figure
every reservation decision is based on:

    available + partial - sum(reserved - returned)   over unconfirmed reservations

Quantities are coerced to Decimal and rounded to two places after each step.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Callable

from agrotic.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from agrotic.domain.model.lot import Lot
from agrotic.domain.model.movement import MovementKind
from agrotic.domain.model.product import Category, Product
from agrotic.domain.model.reservation import Reservation
from agrotic.domain.model.value_objects import ZERO, Money, round2, to_decimal
from agrotic.domain.repository.lot_repository import LotRepository
from agrotic.domain.repository.movement_repository import MovementRepository
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.domain.repository.reservation_repository import ReservationRepository
from agrotic.domain.service.movement_log import MovementLog

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass(frozen=True)
class LotPatch:
    """Partial update for a lot and, through it, its product.

    ``None`` means "leave unchanged" except for ``expires_on``, where
    ``None`` clears the date and ``UNSET`` leaves it alone.
    """

    warehouse_id: str | None = None
    stock: Decimal | None = None
    expires_on: date | None | _Unset = UNSET
    # Product fields
    name: str | None = None
    description: str | None = None
    sku: str | None = None
    purchase_price: Decimal | None = None
    presentation_capacity: Decimal | None = None
    category: Category | None = None
    unit_id: str | None = None
    useful_life_uses: int | None = None

    @property
    def touches_product(self) -> bool:
        return any(
            value is not None
            for value in (
                self.name,
                self.description,
                self.sku,
                self.purchase_price,
                self.presentation_capacity,
                self.category,
                self.unit_id,
                self.useful_life_uses,
            )
        )

    @property
    def touches_lot(self) -> bool:
        return (
            self.warehouse_id is not None
            or self.stock is not None
            or self.expires_on is not UNSET
        )

    def changed_fields(self) -> list[str]:
        """Human labels for what this patch modifies, in a stable order."""
        labels = []
        if self.touches_product:
            labels.append("product data")
        if self.warehouse_id is not None:
            labels.append("warehouse")
        if self.stock is not None:
            labels.append("stock")
        if self.expires_on is not UNSET:
            labels.append("expiry date")
        return labels


@dataclass
class ProductAvailability:
    """Availability of one product summed across its lots."""

    product: Product
    total_available: Decimal = ZERO
    total_returned: Decimal = ZERO
    lots: list[Lot] = field(default_factory=list)

    @property
    def has_returns(self) -> bool:
        return self.total_returned > ZERO


@dataclass(frozen=True)
class LotAvailability:
    """One lot with its computed quantities, for paginated listings."""

    lot: Lot
    product: Product | None
    stock_total: Decimal
    reservable: Decimal
    reserved_active: Decimal

    @property
    def unit_abbreviation(self) -> str:
        return self.product.unit_abbreviation if self.product else ""


class LotStore:

    def __init__(
        self,
        lot_repo: LotRepository,
        product_repo: ProductRepository,
        reservation_repo: ReservationRepository,
        movement_repo: MovementRepository,
        movement_log: MovementLog,
    ) -> None:
        self._lot_repo = lot_repo
        self._product_repo = product_repo
        self._reservation_repo = reservation_repo
        self._movement_repo = movement_repo
        self._movement_log = movement_log

    # --- Commands -------------------------------------------------------------

    def create(
        self,
        product_id: str,
        warehouse_id: str | None,
        stock: Decimal,
        expires_on: date | None = None,
    ) -> Lot:
        """Receive a new lot; fresh units are ``stock x capacity``."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product {product_id} not found")

        lot = Lot.receive(
            product_id=product.id,
            warehouse_id=warehouse_id,
            stock=to_decimal(stock),
            capacity=product.effective_capacity,
            expires_on=expires_on,
        )
        self._lot_repo.save(lot)
        logger.info(
            "Lot %s received for product %s: %s units",
            lot.id, product.id, lot.available_quantity,
        )
        return lot

    def update(self, lot_id: str, patch: LotPatch, acting_dni: int | None = None) -> Lot:
        lot = self.get(lot_id)
        reservations = self._reservation_repo.list_by_lot(lot_id)

        if patch.stock is not None or patch.expires_on is not UNSET:
            if any(not r.is_terminal for r in reservations):
                changed = "stock" if patch.stock is not None else "expiry date"
                raise ConflictError(
                    f"Cannot change the {changed} of lot {lot_id} while it has "
                    f"active reservations. Complete or cancel the related "
                    f"activities first."
                )

        original_available = round2(lot.available_quantity)
        product = self._product_repo.get_by_id(lot.product_id)

        if patch.touches_product and product is not None:
            self._apply_product_changes(product, patch)
            self._product_repo.save(product)

        if patch.warehouse_id is not None:
            lot.warehouse_id = patch.warehouse_id
        if patch.stock is not None:
            capacity = product.effective_capacity if product else Decimal("1")
            lot.restock(to_decimal(patch.stock), capacity)
        if patch.expires_on is not UNSET:
            lot.expires_on = patch.expires_on

        self._lot_repo.save(lot)

        if patch.touches_product or patch.touches_lot:
            self._record_adjustment(lot, original_available, patch, acting_dni)
        return lot

    def remove(self, lot_id: str) -> None:
        """Delete a lot together with its movements and reservation rows."""
        lot = self.get(lot_id)
        reservations = self._reservation_repo.list_by_lot(lot_id)

        if any(not r.is_terminal for r in reservations):
            raise ConflictError(
                f"Cannot delete lot {lot_id} because it has active reservations. "
                f"Complete or cancel the related activities first."
            )
        if lot.stock > ZERO and lot.stock_total > ZERO:
            raise ConflictError(
                f"Cannot delete lot {lot_id} because it still has "
                f"{lot.stock_total} units available. Use or return all "
                f"inventory before deleting the lot."
            )

        self._movement_repo.delete_by_lot(lot_id)
        self._reservation_repo.delete_by_lot(lot_id)
        self._lot_repo.delete(lot_id)
        logger.info("Lot %s removed", lot_id)

    # --- Queries --------------------------------------------------------------

    def get(self, lot_id: str) -> Lot:
        lot = self._lot_repo.get_by_id(lot_id)
        if lot is None:
            raise EntityNotFoundError(f"Lot {lot_id} not found")
        return lot

    def available_quantity(self, lot: Lot) -> Decimal:
        """Quantity that can still be committed to a new reservation."""
        return lot.available_for_reservation(self._reservation_repo.list_by_lot(lot.id))

    def search(
        self, query: str | None, page: int = 1, limit: int = 10
    ) -> tuple[list[ProductAvailability], int]:
        """Products whose name contains ``query`` that still have stock.

        Returns one page of results and the total number of matches.
        """
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be positive")
        needle = (query or "").strip().lower()
        products = self._grouped_availability(
            lambda product: needle in product.name.lower()
        )
        start = (page - 1) * limit
        return products[start:start + limit], len(products)

    def list_available(self) -> list[ProductAvailability]:
        return self._grouped_availability(lambda product: True)

    def list_paginated(self, page: int = 1, limit: int = 10) -> tuple[list[LotAvailability], int]:
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be positive")
        lots = self._lot_repo.list_all()
        start = (page - 1) * limit
        held = self._reservations_by_lot()

        items: list[LotAvailability] = []
        for lot in lots[start:start + limit]:
            reserved_active = lot.held_quantity(held[lot.id])
            items.append(
                LotAvailability(
                    lot=lot,
                    product=self._product_repo.get_by_id(lot.product_id),
                    stock_total=lot.stock_total,
                    reservable=max(ZERO, round2(lot.stock_total - reserved_active)),
                    reserved_active=reserved_active,
                )
            )
        return items, len(lots)

    # --- Internal helpers -----------------------------------------------------

    def _reservations_by_lot(self) -> dict[str, list[Reservation]]:
        grouped: dict[str, list[Reservation]] = defaultdict(list)
        for reservation in self._reservation_repo.list_all():
            grouped[reservation.lot_id].append(reservation)
        return grouped

    def _grouped_availability(
        self, matches: Callable[[Product], bool]
    ) -> list[ProductAvailability]:
        by_lot = self._reservations_by_lot()
        grouped: dict[str, ProductAvailability] = {}

        for lot in self._lot_repo.list_all():
            product = self._product_repo.get_by_id(lot.product_id)
            if product is None:
                logger.warning("Lot %s references missing product %s", lot.id, lot.product_id)
                continue
            if not matches(product):
                continue
            entry = grouped.setdefault(product.id, ProductAvailability(product=product))
            entry.lots.append(lot)
            entry.total_available = round2(
                entry.total_available + lot.available_for_reservation(by_lot[lot.id])
            )
            entry.total_returned = round2(entry.total_returned + round2(lot.partial_quantity))

        available = [entry for entry in grouped.values() if entry.total_available > ZERO]
        # Products with returned stock first, then by descending availability.
        available.sort(key=lambda e: (not e.has_returns, -e.total_available))
        return available

    @staticmethod
    def _apply_product_changes(product: Product, patch: LotPatch) -> None:
        if patch.name:
            product.name = patch.name
        if patch.description is not None:
            product.description = patch.description
        if patch.sku is not None:
            product.sku = patch.sku
        if patch.purchase_price is not None:
            product.update_price(Money.of(patch.purchase_price))
        if patch.presentation_capacity is not None:
            product.update_capacity(to_decimal(patch.presentation_capacity))
        if patch.category is not None:
            product.category = patch.category
        if patch.unit_id is not None:
            product.unit_id = patch.unit_id
        if patch.useful_life_uses is not None:
            product.update_useful_life(patch.useful_life_uses)

    def _record_adjustment(
        self,
        lot: Lot,
        original_available: Decimal,
        patch: LotPatch,
        acting_dni: int | None,
    ) -> None:
        delta = round2(round2(lot.available_quantity) - original_available)
        if delta != ZERO:
            direction = "increase" if delta > ZERO else "decrease"
            note = f"Manual inventory adjustment: {direction} of {abs(delta)} units"
        else:
            labels = patch.changed_fields()
            if len(labels) > 1:
                changed = ", ".join(labels[:-1]) + " and " + labels[-1]
            else:
                changed = labels[0]
            note = f"Manual inventory adjustment: {changed} modified"
        self._movement_log.record(
            lot_id=lot.id,
            kind=MovementKind.ADJUSTMENT,
            quantity=abs(delta),
            note=note,
            responsible_dni=acting_dni,
        )
