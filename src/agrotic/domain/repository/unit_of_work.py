"""Abstract unit of work.

Handlers wrap every state-changing operation in ``transaction()``. An
implementation must serialise writers and undo every repository write made
inside the block when it raises, so a lot's quantities and the reservation
rows drawn against it are always written together.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class UnitOfWork(ABC):

    @abstractmethod
    def transaction(self) -> AbstractContextManager[UnitOfWork]:
        """Open an exclusive, all-or-nothing block."""
