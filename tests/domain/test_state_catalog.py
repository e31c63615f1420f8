"""Unit tests for the reservation state catalog."""

import pytest

from agrotic.domain.exceptions import ConfigurationError
from agrotic.domain.model.reservation import ReservationStatus
from agrotic.domain.service.state_catalog import ReservationStateCatalog
from tests.fakes import FakeReservationStateTable


class TestStateCatalog:

    def test_ids_resolved_by_name(self):
        table = FakeReservationStateTable({"Reservada": "7", "Confirmada": "8", "Cancelada": "9"})
        catalog = ReservationStateCatalog.from_table(table)

        assert catalog.id_for(ReservationStatus.CONFIRMED) == "8"
        assert catalog.status_for("9") == ReservationStatus.CANCELLED
        assert catalog.status_for(7) == ReservationStatus.RESERVED

    def test_missing_state_fails_at_startup(self):
        table = FakeReservationStateTable({"Reservada": "1"})
        with pytest.raises(ConfigurationError, match="Confirmada, Cancelada"):
            ReservationStateCatalog.from_table(table)

    def test_unknown_state_id(self):
        catalog = ReservationStateCatalog.from_table(FakeReservationStateTable())
        with pytest.raises(ConfigurationError, match="Unknown reservation state id"):
            catalog.status_for("99")
