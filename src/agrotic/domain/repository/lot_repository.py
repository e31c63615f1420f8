"""Abstract repository for Lot aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agrotic.domain.model.lot import Lot


class LotRepository(ABC):

    @abstractmethod
    def get_by_id(self, lot_id: str) -> Lot | None:
        """Return a lot by its ID, or None."""

    @abstractmethod
    def list_by_product(self, product_id: str) -> list[Lot]:
        """Return the product's lots in storage order."""

    @abstractmethod
    def list_all(self) -> list[Lot]:
        """Return every lot in storage order."""

    @abstractmethod
    def save(self, lot: Lot) -> None:
        """Persist a new or updated lot, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, lot_id: str) -> None:
        """Remove a lot row."""
