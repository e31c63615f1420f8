"""Domain service: Movement Log.

Writes the audit trail for every stock-affecting event. Recording is an
audit concern, not an inventory one: nothing here raises to the caller.
A missing movement type, a failed responsible-name lookup or a storage
error is logged and the primary operation carries on.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import Decimal

from agrotic.domain.model.movement import Movement, MovementKind
from agrotic.domain.model.value_objects import round2
from agrotic.domain.repository.directories import MovementTypeDirectory, UserDirectory
from agrotic.domain.repository.movement_repository import MovementRepository

logger = logging.getLogger(__name__)


class MovementNotifier(ABC):
    """Fan-out hook for UI clients; called after a movement is stored."""

    @abstractmethod
    def movement_recorded(self, movement: Movement) -> None:
        """Push the movement to interested listeners."""


class MovementLog:

    def __init__(
        self,
        movement_repo: MovementRepository,
        movement_types: MovementTypeDirectory,
        users: UserDirectory,
        notifier: MovementNotifier | None = None,
    ) -> None:
        self._movement_repo = movement_repo
        self._movement_types = movement_types
        self._users = users
        self._notifier = notifier

    def record(
        self,
        lot_id: str,
        kind: MovementKind,
        quantity: Decimal,
        note: str,
        reservation_id: str | None = None,
        responsible_dni: int | None = None,
    ) -> Movement | None:
        """Append a movement; returns None when nothing was written."""
        movement_type = self._movement_types.get_by_name(kind.value)
        if movement_type is None:
            logger.warning("Movement type %r not found, movement skipped", kind.value)
            return None

        movement = Movement(
            id=None,
            lot_id=lot_id,
            type_id=movement_type.id,
            type_name=movement_type.name,
            quantity=round2(quantity),
            note=note,
            reservation_id=reservation_id,
            responsible=self._responsible(responsible_dni),
        )
        try:
            self._movement_repo.add(movement)
        except Exception:
            logger.exception("Could not record %s movement for lot %s", kind.value, lot_id)
            return None

        logger.info("%s movement of %s recorded for lot %s", kind.value, movement.quantity, lot_id)
        self._notify(movement)
        return movement

    def _responsible(self, dni: int | None) -> str | None:
        if dni is None:
            return None
        try:
            user = self._users.get_by_dni(dni)
        except Exception:
            logger.exception("Responsible lookup failed for dni %s", dni)
            return None
        return user.responsible_label if user is not None else None

    def _notify(self, movement: Movement) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.movement_recorded(movement)
        except Exception:
            logger.exception("Movement notification failed for movement %s", movement.id)
