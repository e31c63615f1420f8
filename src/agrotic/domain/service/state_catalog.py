"""Reservation state ids resolved from the lookup table once, at wiring time."""

from __future__ import annotations

from agrotic.domain.exceptions import ConfigurationError
from agrotic.domain.model.reservation import ReservationStatus
from agrotic.domain.repository.directories import ReservationStateTable


class ReservationStateCatalog:

    def __init__(self, ids_by_status: dict[ReservationStatus, str]) -> None:
        self._ids = dict(ids_by_status)
        self._statuses = {state_id: status for status, state_id in self._ids.items()}

    @classmethod
    def from_table(cls, table: ReservationStateTable) -> ReservationStateCatalog:
        """Build the catalog, failing fast if any known state is missing."""
        rows = table.load()
        missing = [s.value for s in ReservationStatus if s.value not in rows]
        if missing:
            raise ConfigurationError(
                f"Reservation state table is missing: {', '.join(missing)}"
            )
        return cls({status: rows[status.value] for status in ReservationStatus})

    def id_for(self, status: ReservationStatus) -> str:
        return self._ids[status]

    def status_for(self, state_id: str) -> ReservationStatus:
        try:
            return self._statuses[str(state_id)]
        except KeyError:
            raise ConfigurationError(f"Unknown reservation state id: {state_id!r}") from None
