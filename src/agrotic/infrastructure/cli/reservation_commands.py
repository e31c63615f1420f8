"""CLI commands for the reservation ledger."""

from __future__ import annotations

import click

from agrotic.application.reserve_inventory import ReserveLotHandler, ReserveProductHandler
from agrotic.application.settle_reservation import CancelReservationHandler, ConfirmUsageHandler
from agrotic.application.show_reservations import ShowReservationsHandler
from agrotic.domain.exceptions import DomainException
from agrotic.infrastructure.bootstrap import (
    activity_repository,
    lot_repository,
    product_repository,
    reservation_ledger,
    unit_of_work,
)
from agrotic.infrastructure.cli.params import DECIMAL


def _reserve_deps() -> dict:
    return dict(
        uow=unit_of_work(),
        ledger=reservation_ledger(),
        activity_repo=activity_repository(),
        lot_repo=lot_repository(),
        product_repo=product_repository(),
    )


@click.command("reserve")
@click.option("--activity", "activity_id", required=True, help="Activity ID.")
@click.option("--lot", "lot_id", required=True, help="Lot ID.")
@click.option("--quantity", type=DECIMAL, required=True, help="Units to reserve.")
def reservation_reserve(activity_id, lot_id, quantity) -> None:
    """Reserve units of a specific lot for an activity."""
    handler = ReserveLotHandler(**_reserve_deps())

    try:
        dto = handler.handle(activity_id, lot_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reservation #{dto.id}: {dto.reserved} of {dto.product_name} from lot #{dto.lot_id}")


@click.command("reserve-product")
@click.option("--activity", "activity_id", required=True, help="Activity ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", type=DECIMAL, required=True, help="Units to reserve.")
def reservation_reserve_product(activity_id, product_id, quantity) -> None:
    """Reserve units of a product from the first lot that can cover them."""
    handler = ReserveProductHandler(**_reserve_deps())

    try:
        dto = handler.handle(activity_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reservation #{dto.id}: {dto.reserved} of {dto.product_name} from lot #{dto.lot_id}")


@click.command("confirm")
@click.option("--id", "reservation_id", required=True, help="Reservation ID.")
@click.option("--used", type=DECIMAL, required=True, help="Units actually used.")
def reservation_confirm(reservation_id, used) -> None:
    """Confirm a reservation with the quantity actually used."""
    handler = ConfirmUsageHandler(uow=unit_of_work(), ledger=reservation_ledger())

    try:
        handler.handle(reservation_id, used)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reservation #{reservation_id} confirmed with {used} used.")


@click.command("cancel")
@click.option("--id", "reservation_id", required=True, help="Reservation ID.")
def reservation_cancel(reservation_id) -> None:
    """Cancel a reservation, returning its units to the lot."""
    handler = CancelReservationHandler(
        uow=unit_of_work(),
        ledger=reservation_ledger(),
        activity_repo=activity_repository(),
    )

    try:
        returned = handler.handle(reservation_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reservation #{reservation_id} cancelled, {returned:.2f} units returned.")


@click.command("list")
@click.option("--activity", "activity_id", required=True, help="Activity ID.")
def reservation_list(activity_id) -> None:
    """List the reservations of an activity."""
    handler = ShowReservationsHandler(
        ledger=reservation_ledger(),
        lot_repo=lot_repository(),
        product_repo=product_repository(),
    )
    rows = handler.handle(activity_id)

    if not rows:
        click.echo("No reservations found.")
        return

    click.echo(
        f"  {'ID':<6} {'Lot':<6} {'Product':<24} {'Status':<11} "
        f"{'Reserved':>9} {'Used':>9} {'Returned':>9}"
    )
    click.echo(f"  {'-'*80}")
    for r in rows:
        click.echo(
            f"  {r.id:<6} {r.lot_id:<6} {r.product_name:<24} {r.status:<11} "
            f"{r.reserved:>9} {r.used or '-':>9} {r.returned:>9}"
        )
