"""Abstract repository for the reservation ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agrotic.domain.model.reservation import Reservation


class ReservationRepository(ABC):

    @abstractmethod
    def get_by_id(self, reservation_id: str) -> Reservation | None:
        """Return a reservation by its ID, or None."""

    @abstractmethod
    def list_by_activity(self, activity_id: str) -> list[Reservation]:
        """Return every reservation made for an activity."""

    @abstractmethod
    def list_by_lot(self, lot_id: str) -> list[Reservation]:
        """Return every reservation drawn against a lot."""

    @abstractmethod
    def list_all(self) -> list[Reservation]:
        """Return every reservation."""

    @abstractmethod
    def save(self, reservation: Reservation) -> None:
        """Persist a new or updated reservation, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, reservation_id: str) -> None:
        """Hard-delete a reservation row."""

    @abstractmethod
    def delete_by_lot(self, lot_id: str) -> None:
        """Hard-delete every reservation drawn against a lot."""
