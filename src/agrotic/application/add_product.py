"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from agrotic.domain.exceptions import ValidationError
from agrotic.domain.model.product import Category, Product
from agrotic.domain.model.value_objects import ZERO, Money
from agrotic.domain.repository.product_repository import ProductRepository
from agrotic.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork, product_repo: ProductRepository) -> None:
        self._uow = uow
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        presentation_capacity: Decimal | None = None,
        category: Category | None = None,
        sku: str | None = None,
        unit_abbreviation: str = "",
        useful_life_uses: int | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if presentation_capacity is not None and presentation_capacity <= ZERO:
            raise ValidationError("Presentation capacity must be greater than zero")

        with self._uow.transaction():
            for existing in self._product_repo.list_all():
                if existing.name.lower() == name.strip().lower():
                    raise ValidationError(f"Product '{name}' already exists")

            product = Product(
                id=None,
                name=name.strip(),
                purchase_price=Money.of(price),
                sku=sku,
                presentation_capacity=presentation_capacity,
                category=category,
                unit_abbreviation=unit_abbreviation,
                useful_life_uses=useful_life_uses,
            )
            self._product_repo.save(product)
        return product
