"""Product aggregate.

Products live independently of lots and reservations. Commercial attributes
(price, presentation capacity, category) change over time; reservations copy
what they need at reservation time so history is not rewritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from agrotic.domain.exceptions import ValidationError
from agrotic.domain.model.value_objects import ZERO, Money


@dataclass(frozen=True)
class Category:
    """Product category. ``divisible`` separates consumables from tools."""

    id: str | None
    name: str
    divisible: bool = True


@dataclass
class Product:
    """A purchasable item.

    ``presentation_capacity`` is the number of base units per purchased
    package (liters per bottle, kilos per sack). ``useful_life_uses`` only
    matters for non-divisible products and drives per-use depreciation.
    """

    id: str | None
    name: str
    purchase_price: Money
    sku: str | None = None
    description: str | None = None
    presentation_capacity: Decimal | None = None
    category: Category | None = None
    unit_id: str | None = None
    unit_abbreviation: str = ""
    useful_life_uses: int | None = None

    @property
    def is_divisible(self) -> bool:
        # Uncategorised products are costed as consumables.
        if self.category is None:
            return True
        return self.category.divisible

    @property
    def effective_capacity(self) -> Decimal:
        """Capacity used to convert packages to units; unset counts as 1."""
        if not self.presentation_capacity:
            return Decimal("1")
        return self.presentation_capacity

    def update_price(self, new_price: Money) -> None:
        if new_price.amount <= ZERO:
            raise ValidationError("Product price must be greater than zero")
        self.purchase_price = new_price

    def update_capacity(self, capacity: Decimal) -> None:
        if capacity <= ZERO:
            raise ValidationError("Presentation capacity must be greater than zero")
        self.presentation_capacity = capacity

    def update_useful_life(self, uses: int | None) -> None:
        if uses is not None and uses < 0:
            raise ValidationError("Useful life cannot be negative")
        self.useful_life_uses = uses
