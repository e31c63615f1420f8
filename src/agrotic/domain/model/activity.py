"""Activity aggregate: a field task that consumes reserved inventory.

State machine: active (``active=True``) -> finalized (``active=False``),
one-way, and only the recorded responsible user may finalize.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from agrotic.domain.exceptions import AuthorizationError, ValidationError


@dataclass
class Assignment:
    """A user assigned to work on an activity."""

    id: str | None
    activity_id: str
    user_id: str
    assigned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    active: bool = True


# Fields a shallow update may touch.
UPDATABLE_FIELDS = (
    "description",
    "crop_zone_id",
    "category_id",
    "assigned_on",
    "observation",
    "photo_url",
)


@dataclass
class Activity:

    id: str | None
    description: str
    crop_zone_id: str
    category_id: str
    assigned_on: date
    responsible_dni: int
    active: bool = True
    finished_at: datetime | None = None
    observation: str | None = None
    photo_url: str | None = None
    hours_worked: Decimal | None = None
    hourly_rate: Decimal | None = None

    # --- Factory (used for NEW activities only) -------------------------------

    @staticmethod
    def create(
        description: str,
        crop_zone_id: str,
        category_id: str,
        assigned_on: date,
        responsible_dni: int,
    ) -> Activity:
        if not description or not description.strip():
            raise ValidationError("Activity description is required")
        return Activity(
            id=None,
            description=description.strip(),
            crop_zone_id=crop_zone_id,
            category_id=category_id,
            assigned_on=assigned_on,
            responsible_dni=responsible_dni,
        )

    # --- Mutations ------------------------------------------------------------

    def apply(self, changes: dict) -> None:
        """Shallow-merge the given fields; unknown keys are rejected."""
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Cannot update activity fields: {', '.join(sorted(unknown))}"
            )
        for name, value in changes.items():
            setattr(self, name, value)

    def finalize(
        self,
        observation: str | None = None,
        photo_url: str | None = None,
        hours: Decimal | None = None,
        hourly_rate: Decimal | None = None,
        acting_dni: int | None = None,
    ) -> None:
        """Transition active -> finalized.

        Does not touch reservations; usage is confirmed separately.
        """
        if acting_dni is not None and acting_dni != self.responsible_dni:
            raise AuthorizationError("Only the responsible user can finalize the activity")
        if not self.active:
            raise ValidationError(f"Activity {self.id} is already finalized")
        self.active = False
        self.finished_at = datetime.now(timezone.utc)
        if observation:
            self.observation = observation
        if photo_url:
            self.photo_url = photo_url
        if hours is not None:
            self.hours_worked = hours
        if hourly_rate is not None:
            self.hourly_rate = hourly_rate
