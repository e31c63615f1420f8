"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from agrotic.domain.model.product import Category, Product
from agrotic.domain.model.value_objects import Money
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.infrastructure.persistence.json_table import JsonTable


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._table.load_raw():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._table.load_raw()]

    def save(self, product: Product) -> None:
        if product.id is None:
            product.id = self._table.next_id(self._table.load_raw())
        self._table.upsert(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        category = product.category
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "description": product.description,
            "purchase_price": str(product.purchase_price.amount),
            "currency": product.purchase_price.currency,
            "presentation_capacity": (
                str(product.presentation_capacity)
                if product.presentation_capacity is not None
                else None
            ),
            "category": (
                {"id": category.id, "name": category.name, "divisible": category.divisible}
                if category is not None
                else None
            ),
            "unit_id": product.unit_id,
            "unit_abbreviation": product.unit_abbreviation,
            "useful_life_uses": product.useful_life_uses,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        category = raw.get("category")
        capacity = raw.get("presentation_capacity")
        return Product(
            id=raw["id"],
            name=raw["name"],
            purchase_price=Money(Decimal(raw["purchase_price"]), raw.get("currency", "COP")),
            sku=raw.get("sku"),
            description=raw.get("description"),
            presentation_capacity=Decimal(capacity) if capacity is not None else None,
            category=(
                Category(
                    id=category.get("id"),
                    name=category["name"],
                    divisible=category.get("divisible", True),
                )
                if category
                else None
            ),
            unit_id=raw.get("unit_id"),
            unit_abbreviation=raw.get("unit_abbreviation", ""),
            useful_life_uses=raw.get("useful_life_uses"),
        )
