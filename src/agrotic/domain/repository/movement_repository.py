"""Abstract repository for the append-only movement log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agrotic.domain.model.movement import Movement


class MovementRepository(ABC):

    @abstractmethod
    def add(self, movement: Movement) -> None:
        """Append a movement, assigning its ID."""

    @abstractmethod
    def list_by_lot(self, lot_id: str) -> list[Movement]:
        """Return a lot's movements, oldest first."""

    @abstractmethod
    def delete_by_lot(self, lot_id: str) -> None:
        """Cascade-delete a lot's movements (only when the lot goes)."""
