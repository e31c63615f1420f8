"""Application service: inventory queries (search, availability, paging)."""

from __future__ import annotations

from agrotic.application.dto import LotLineDTO, ProductAvailabilityDTO, fmt
from agrotic.domain.service.lot_store import LotStore, ProductAvailability


class SearchInventoryHandler:

    def __init__(self, lot_store: LotStore) -> None:
        self._lot_store = lot_store

    def search(
        self, query: str | None, page: int = 1, limit: int = 10
    ) -> tuple[list[ProductAvailabilityDTO], int]:
        items, total = self._lot_store.search(query, page, limit)
        return [self._to_dto(item) for item in items], total

    def available(self) -> list[ProductAvailabilityDTO]:
        return [self._to_dto(item) for item in self._lot_store.list_available()]

    def lots(self, page: int = 1, limit: int = 10) -> tuple[list[LotLineDTO], int]:
        items, total = self._lot_store.list_paginated(page, limit)
        return [
            LotLineDTO(
                id=item.lot.id,  # type: ignore[arg-type]
                product_name=item.product.name if item.product else "?",
                stock=fmt(item.lot.stock),
                stock_total=fmt(item.stock_total),
                reservable=fmt(item.reservable),
                reserved=fmt(item.reserved_active),
                unit=item.unit_abbreviation,
            )
            for item in items
        ], total

    @staticmethod
    def _to_dto(item: ProductAvailability) -> ProductAvailabilityDTO:
        product = item.product
        return ProductAvailabilityDTO(
            id=product.id,
            name=product.name,
            sku=product.sku,
            purchase_price=str(product.purchase_price),
            divisible=product.is_divisible,
            presentation_capacity=fmt(product.presentation_capacity),
            unit=product.unit_abbreviation,
            available=fmt(item.total_available),
            returned=fmt(item.total_returned),
            has_returns=item.has_returns,
            lot_ids=[lot.id for lot in item.lots],  # type: ignore[misc]
        )
