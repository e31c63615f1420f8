"""Lookup collaborators consumed by the core.

These are owned by other parts of the system (user management, seed data);
the core only reads them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from agrotic.domain.model.movement import MovementType
from agrotic.domain.model.user import User


class UserDirectory(ABC):

    @abstractmethod
    def get_by_dni(self, dni: int) -> User | None:
        """Return the user with this national ID, or None."""


class MovementTypeDirectory(ABC):

    @abstractmethod
    def get_by_name(self, name: str) -> MovementType | None:
        """Return the movement type with this exact name, or None."""


class ReservationStateTable(ABC):

    @abstractmethod
    def load(self) -> dict[str, str]:
        """Return the state lookup table as ``{name: id}``."""
