"""Regression test: concurrent reservations must not oversell a lot."""

import threading
from decimal import Decimal

from agrotic.application.reserve_inventory import ReserveProductHandler
from agrotic.domain.exceptions import InsufficientStockError
from tests.fakes import World, make_lot, make_product


class _SlowLots:
    """Delays lot reads so an unserialised check-then-write would interleave."""

    def __init__(self, inner, barrier: threading.Barrier) -> None:
        self._inner = inner
        self._barrier = barrier

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def list_by_product(self, product_id):
        try:
            self._barrier.wait(timeout=0.2)
        except threading.BrokenBarrierError:
            pass
        return self._inner.list_by_product(product_id)


def test_two_concurrent_reservations_only_one_fits():
    world = World()
    world.products.save(make_product())
    world.lots.save(make_lot("L1", available="100"))
    activity_a = world.add_activity("Fertilize A")
    activity_b = world.add_activity("Fertilize B")

    # Both threads would meet at the barrier if nothing serialised them.
    world.ledger._lot_repo = _SlowLots(world.lots, threading.Barrier(2))
    handler = ReserveProductHandler(world.uow, world.ledger, world.activities, world.lots, world.products)

    outcomes: list[str] = []
    lock = threading.Lock()

    def reserve(activity_id: str) -> None:
        try:
            handler.handle(activity_id, "p1", Decimal("60"))
            result = "ok"
        except InsufficientStockError:
            result = "insufficient"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=reserve, args=(a.id,)) for a in (activity_a, activity_b)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["insufficient", "ok"]
    assert len(world.reservations.list_all()) == 1
    assert world.lot_store.available_quantity(world.lots.get_by_id("L1")) == Decimal("40")
