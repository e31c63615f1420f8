"""Tests for the JSON-file repositories and unit of work."""

import json
from datetime import date
from decimal import Decimal

import pytest

from agrotic.domain.model.activity import Activity
from agrotic.domain.model.movement import Movement
from agrotic.domain.model.reservation import Reservation, ReservationStatus
from agrotic.domain.model.value_objects import Money
from agrotic.domain.service.state_catalog import ReservationStateCatalog
from agrotic.infrastructure.persistence.json_activity_repository import JsonActivityRepository
from agrotic.infrastructure.persistence.json_directories import (
    JsonMovementTypeDirectory,
    JsonReservationStateTable,
)
from agrotic.infrastructure.persistence.json_lot_repository import JsonLotRepository
from agrotic.infrastructure.persistence.json_movement_repository import JsonMovementRepository
from agrotic.infrastructure.persistence.json_product_repository import JsonProductRepository
from agrotic.infrastructure.persistence.json_reservation_repository import (
    JsonReservationRepository,
)
from agrotic.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from tests.fakes import TOOLS, make_lot, make_product


def _catalog(tmp_path) -> ReservationStateCatalog:
    return ReservationStateCatalog.from_table(
        JsonReservationStateTable(tmp_path / "reservation_states.json")
    )


class TestLookupTables:

    def test_seeded_on_first_use(self, tmp_path):
        types = JsonMovementTypeDirectory(tmp_path / "movement_types.json")
        states = JsonReservationStateTable(tmp_path / "reservation_states.json")

        assert types.get_by_name("Devolución").id == "2"
        assert states.load() == {"Reservada": "1", "Confirmada": "2", "Cancelada": "3"}

    def test_existing_rows_are_kept(self, tmp_path):
        path = tmp_path / "reservation_states.json"
        path.write_text(json.dumps([{"id": 9, "name": "Reservada"}]), encoding="utf-8")

        assert JsonReservationStateTable(path).load() == {"Reservada": "9"}


class TestRepositories:

    def test_product_round_trip(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        tool = make_product(None, "Sprayer", price="1000.50", capacity="1",
                            category=TOOLS, useful_life_uses=100)

        repo.save(tool)
        loaded = repo.get_by_id(tool.id)

        assert tool.id == "1"
        assert loaded == tool
        assert not loaded.is_divisible

    def test_lot_round_trip_and_delete(self, tmp_path):
        repo = JsonLotRepository(tmp_path / "lots.json")
        lot = make_lot(None, available="12.5", partial="0.75")
        lot.expires_on = date(2025, 1, 31)

        repo.save(lot)
        repo.save(make_lot(None, product_id="p2"))

        assert repo.get_by_id("1") == lot
        assert [l.id for l in repo.list_by_product("p2")] == ["2"]
        repo.delete("1")
        assert [l.id for l in repo.list_all()] == ["2"]

    def test_reservation_stores_state_id(self, tmp_path):
        repo = JsonReservationRepository(tmp_path / "reservations.json", _catalog(tmp_path))
        r = Reservation(
            id=None, activity_id="a1", lot_id="L1", reserved_quantity=Decimal("30"),
            presentation_capacity=None, unit_price=Money.of("50000"),
        )
        r.confirm_usage(Decimal("12.5"))

        repo.save(r)

        raw = json.loads((tmp_path / "reservations.json").read_text(encoding="utf-8"))
        assert raw[0]["state_id"] == "2"
        loaded = repo.get_by_id(r.id)
        assert loaded.status == ReservationStatus.CONFIRMED
        assert loaded.used_quantity == Decimal("12.50")
        repo.delete_by_lot("L1")
        assert repo.list_all() == []

    def test_movements_append(self, tmp_path):
        repo = JsonMovementRepository(tmp_path / "movements.json")
        for qty in ("1", "2"):
            repo.add(Movement(id=None, lot_id="L1", type_id="1", type_name="Reserva",
                              quantity=Decimal(qty), note="n"))

        assert [m.id for m in repo.list_by_lot("L1")] == ["1", "2"]

    def test_activity_round_trip(self, tmp_path):
        repo = JsonActivityRepository(tmp_path / "activities.json")
        activity = Activity.create("Weeding", "z1", "cat1", date(2024, 4, 10), 1001)
        activity.finalize(hours=Decimal("3"), hourly_rate=Decimal("9000"), acting_dni=1001)
        repo.save(activity)

        assert repo.get_by_id(activity.id) == activity


class TestJsonUnitOfWork:

    def test_failed_block_restores_tables(self, tmp_path):
        lots = JsonLotRepository(tmp_path / "lots.json")
        lots.save(make_lot(None, available="10"))
        uow = JsonUnitOfWork(tmp_path)

        with pytest.raises(RuntimeError):
            with uow.transaction():
                lot = lots.get_by_id("1")
                lot.return_to_partial(Decimal("5"))
                lots.save(lot)
                lots.save(make_lot(None))
                raise RuntimeError("boom")

        assert [l.id for l in lots.list_all()] == ["1"]
        assert lots.get_by_id("1").partial_quantity == Decimal("0")

    def test_nested_blocks_commit_with_outer(self, tmp_path):
        lots = JsonLotRepository(tmp_path / "lots.json")
        uow = JsonUnitOfWork(tmp_path)

        with uow.transaction():
            with uow.transaction():
                lots.save(make_lot(None))

        assert len(lots.list_all()) == 1
