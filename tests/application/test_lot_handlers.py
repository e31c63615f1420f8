"""Integration tests for the lot and inventory use cases."""

from decimal import Decimal

import pytest

from agrotic.application.add_product import AddProductHandler
from agrotic.application.create_lot import CreateLotHandler
from agrotic.application.remove_lot import RemoveLotHandler
from agrotic.application.search_inventory import SearchInventoryHandler
from agrotic.application.update_lot import UpdateLotHandler
from agrotic.domain.exceptions import ConflictError, ValidationError
from agrotic.domain.service.lot_store import LotPatch
from tests.fakes import World, make_lot, make_product


class TestAddProduct:

    def test_product_added_with_generated_id(self):
        world = World()

        product = AddProductHandler(world.uow, world.products).handle(
            "Urea", "50000", presentation_capacity=Decimal("50"), unit_abbreviation="kg"
        )

        assert product.id == "1"
        assert world.products.get_by_id("1").effective_capacity == Decimal("50")

    def test_duplicate_name_rejected(self):
        world = World()
        handler = AddProductHandler(world.uow, world.products)
        handler.handle("Urea", "50000")
        with pytest.raises(ValidationError, match="already exists"):
            handler.handle("urea", "1")


class TestLotHandlers:

    def test_create_lot(self):
        world = World()
        world.products.save(make_product(capacity="5"))

        dto = CreateLotHandler(world.uow, world.lot_store).handle("p1", "w1", Decimal("10"))

        assert dto.available_quantity == "50.00"
        assert dto.partial_quantity == "0.00"

    def test_update_conflict_rolls_back_product_change(self):
        world = World()
        world.products.save(make_product(name="Urea"))
        world.lots.save(make_lot("L1"))
        world.ledger.reserve("a1", "L1", Decimal("5"))

        with pytest.raises(ConflictError):
            UpdateLotHandler(world.uow, world.lot_store).handle(
                "L1", LotPatch(name="Renamed", stock=Decimal("9"))
            )

        assert world.products.get_by_id("p1").name == "Urea"

    def test_remove_lot(self):
        world = World()
        world.products.save(make_product())
        world.lots.save(make_lot("L1", available="0"))

        RemoveLotHandler(world.uow, world.lot_store).handle("L1")

        assert world.lots.list_all() == []


class TestSearchInventory:

    def test_dto_flags_returned_stock(self):
        world = World()
        world.products.save(make_product(name="Urea"))
        world.lots.save(make_lot("L1", available="10", partial="2"))
        handler = SearchInventoryHandler(world.lot_store)

        items, total = handler.search("ur")

        assert total == 1
        assert items[0].available == "12.00"
        assert items[0].has_returns
        assert items[0].lot_ids == ["L1"]
        assert handler.available() == items

    def test_lot_lines(self):
        world = World()
        world.products.save(make_product(name="Urea"))
        world.lots.save(make_lot("L1", available="10"))
        world.ledger.reserve("a1", "L1", Decimal("4"))

        lines, total = SearchInventoryHandler(world.lot_store).lots()

        assert total == 1
        assert lines[0].reserved == "4.00"
        assert lines[0].reservable == "6.00"
