"""Integration tests for the RemoveActivity cascade."""

from decimal import Decimal

import pytest

from agrotic.application.remove_activity import RemoveActivityHandler
from agrotic.domain.exceptions import EntityNotFoundError
from agrotic.domain.model.activity import Assignment
from tests.fakes import World, make_lot, make_product


def _setup():
    world = World()
    world.products.save(make_product())
    world.lots.save(make_lot("L1", available="100"))
    activity = world.add_activity()
    handler = RemoveActivityHandler(world.uow, world.activities, world.assignments, world.ledger)
    return world, activity, handler


class TestRemoveActivity:

    def test_unconfirmed_reservation_returns_to_partial(self):
        world, activity, handler = _setup()
        world.ledger.reserve(activity.id, "L1", Decimal("37.25"))

        report = handler.handle(activity.id)

        lot = world.lots.get_by_id("L1")
        assert lot.partial_quantity == Decimal("37.25")
        assert world.reservations.list_all() == []
        assert world.activities.get_by_id(activity.id) is None
        assert report.failures == []
        assert [r.ok for r in report.returns] == [True]

    def test_confirmed_reservation_only_returns_unused_part(self):
        world, activity, handler = _setup()
        used = world.ledger.reserve(activity.id, "L1", Decimal("30"))
        world.ledger.confirm_usage(used.id, Decimal("30"))
        world.ledger.reserve(activity.id, "L1", Decimal("10"))

        report = handler.handle(activity.id)

        lot = world.lots.get_by_id("L1")
        assert lot.available_quantity == Decimal("100")
        assert lot.partial_quantity == Decimal("10")
        assert len(report.returns) == 1
        assert len(report.deleted_reservations) == 2

    def test_second_removal_is_not_found(self):
        world, activity, handler = _setup()
        world.ledger.reserve(activity.id, "L1", Decimal("30"))
        handler.handle(activity.id)

        with pytest.raises(EntityNotFoundError):
            handler.handle(activity.id)

        assert world.lots.get_by_id("L1").partial_quantity == Decimal("30")

    def test_assignments_are_deleted(self):
        world, activity, handler = _setup()
        world.assignments.add(Assignment(id=None, activity_id=activity.id, user_id="u2"))

        report = handler.handle(activity.id)

        assert world.assignments.list_by_activity(activity.id) == []
        assert [r.ok for r in report.deleted_assignments] == [True]

    def test_item_failure_is_reported_not_raised(self, caplog):
        world, activity, handler = _setup()
        stuck = world.ledger.reserve(activity.id, "L1", Decimal("5"))
        world.ledger.reserve(activity.id, "L1", Decimal("6"))
        world.reservations.fail_delete_for.add(stuck.id)

        report = handler.handle(activity.id)

        [failure] = report.failures
        assert failure.item_id == stuck.id
        assert "refused" in failure.error
        assert world.activities.get_by_id(activity.id) is None
        assert world.lots.get_by_id("L1").partial_quantity == Decimal("11")
        assert f"step for {stuck.id} failed" in caplog.text

    def test_audit_failure_does_not_block_removal(self):
        world, activity, handler = _setup()
        world.ledger.reserve(activity.id, "L1", Decimal("8"))
        world.movements.fail = True

        report = handler.handle(activity.id)

        assert report.failures == []
        assert world.lots.get_by_id("L1").partial_quantity == Decimal("8")
