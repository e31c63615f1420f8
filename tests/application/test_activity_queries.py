"""Integration tests for activity cost and listing queries."""

from datetime import date
from decimal import Decimal

import pytest

from agrotic.application.activity_cost import ActivityCostHandler
from agrotic.application.show_activities import ShowActivitiesHandler
from agrotic.domain.exceptions import EntityNotFoundError, ValidationError
from agrotic.domain.model.activity import Activity
from tests.fakes import TOOLS, World, make_lot, make_product


def _setup():
    world = World()
    world.products.save(make_product("p1", "Urea", price="100", capacity="10"))
    world.products.save(
        make_product("t1", "Sprayer", price="1000", capacity="1", category=TOOLS, useful_life_uses=100)
    )
    world.lots.save(make_lot("L1", "p1", available="100"))
    world.lots.save(make_lot("L2", "t1", available="3"))
    cost = ActivityCostHandler(world.activities, world.ledger, world.lots, world.products)
    show = ShowActivitiesHandler(
        world.activities, world.users, world.ledger, world.lots, world.products, cost
    )
    return world, cost, show


def _add(world: World, description: str, day: date, zone: str = "z1", dni: int = 1001) -> Activity:
    activity = Activity.create(description, zone, "cat1", day, dni)
    world.activities.save(activity)
    return activity


class TestActivityCost:

    def test_only_confirmed_reservations_are_costed(self):
        world, cost, _ = _setup()
        activity = world.add_activity()
        used = world.ledger.reserve(activity.id, "L1", Decimal("3"))
        world.ledger.confirm_usage(used.id, Decimal("3"))
        tool = world.ledger.reserve(activity.id, "L2", Decimal("1"))
        world.ledger.confirm_usage(tool.id, Decimal("1"))
        world.ledger.reserve(activity.id, "L1", Decimal("50"))

        report = cost.handle(activity.id)

        assert [line.subtotal for line in report.lines] == ["30.00", "9.00"]
        assert report.inputs_cost == "39.00"
        assert report.labor_cost == "0.00"

    def test_labor_from_finalized_activity(self):
        world, cost, _ = _setup()
        activity = world.add_activity()
        activity.finalize(hours=Decimal("2.5"), hourly_rate=Decimal("8000"), acting_dni=1001)

        report = cost.handle(activity.id)

        assert report.labor_cost == "20000.00"
        assert report.total_cost == "20000.00"

    def test_unknown_activity(self):
        _, cost, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            cost.handle("404")


class TestShowActivities:

    def test_find_includes_reservations_and_responsible(self):
        world, _, show = _setup()
        activity = world.add_activity()
        world.ledger.reserve(activity.id, "L1", Decimal("3"))

        dto = show.find(activity.id)

        assert dto.responsible_name == "Ana Rojas"
        assert [r.product_name for r in dto.reservations] == ["Urea"]

    def test_by_date_lists_active_only(self):
        world, _, show = _setup()
        day = date(2024, 4, 10)
        _add(world, "Weeding", day)
        done = _add(world, "Pruning", day)
        done.finalize(acting_dni=1001)
        _add(world, "Irrigation", date(2024, 4, 11))

        assert [a.description for a in show.by_date(day)] == ["Weeding"]
        assert show.count_by_date(day) == 2

    def test_by_date_range(self):
        world, _, show = _setup()
        _add(world, "A", date(2024, 4, 9))
        _add(world, "B", date(2024, 4, 10))
        _add(world, "C", date(2024, 4, 12))

        rows = show.by_date_range(date(2024, 4, 10), date(2024, 4, 12))

        assert [a.description for a in rows] == ["B", "C"]
        with pytest.raises(ValidationError):
            show.by_date_range(date(2024, 4, 12), date(2024, 4, 10))

    def test_by_crop_zone_newest_first_with_cost(self):
        world, _, show = _setup()
        old = _add(world, "Old", date(2024, 1, 5), zone="z9")
        r = world.ledger.reserve(old.id, "L1", Decimal("2"))
        world.ledger.confirm_usage(r.id, Decimal("2"))
        old.finalize(acting_dni=1001)
        _add(world, "New", date(2024, 2, 5), zone="z9")
        _add(world, "Elsewhere", date(2024, 3, 5), zone="z1")

        rows = show.by_crop_zone("z9")

        assert [a.description for a in rows] == ["New", "Old"]
        assert rows[0].cost is None
        assert rows[1].cost.total_cost == "20.00"

    def test_directory_outage_leaves_name_empty(self):
        world, _, show = _setup()
        _add(world, "Weeding", date(2024, 4, 10))
        world.users.fail = True

        [dto] = show.by_date(date(2024, 4, 10))

        assert dto.responsible_name is None
