"""Movement: append-only audit entry for a stock-affecting event."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class MovementKind(Enum):
    """Values are the names stored in the movement type lookup table."""

    RESERVATION = "Reserva"
    RETURN = "Devolución"
    ADJUSTMENT = "Ajuste"


@dataclass(frozen=True)
class MovementType:
    id: str
    name: str


@dataclass
class Movement:

    id: str | None
    lot_id: str
    type_id: str
    type_name: str
    quantity: Decimal
    note: str
    reservation_id: str | None = None
    responsible: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
