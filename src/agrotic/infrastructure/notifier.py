"""MovementNotifier that publishes recorded movements to the log.

Stands in for the push channel UI clients subscribe to.
"""

from __future__ import annotations

import logging

from agrotic.domain.model.movement import Movement
from agrotic.domain.service.movement_log import MovementNotifier

logger = logging.getLogger("agrotic.movements")


class LoggingMovementNotifier(MovementNotifier):

    def movement_recorded(self, movement: Movement) -> None:
        logger.info(
            "movement %s: %s %s on lot %s (%s)",
            movement.id,
            movement.type_name,
            movement.quantity,
            movement.lot_id,
            movement.responsible or "no responsible",
        )
