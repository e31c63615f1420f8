"""CLI commands for inventory lots."""

from __future__ import annotations

import click

from agrotic.application.create_lot import CreateLotHandler
from agrotic.application.remove_lot import RemoveLotHandler
from agrotic.application.search_inventory import SearchInventoryHandler
from agrotic.application.update_lot import UpdateLotHandler
from agrotic.domain.exceptions import DomainException
from agrotic.domain.service.lot_store import UNSET, LotPatch
from agrotic.infrastructure.bootstrap import lot_store, unit_of_work
from agrotic.infrastructure.cli.params import DECIMAL, ISO_DATE


def _display_availability(items) -> None:
    click.echo(f"  {'ID':<6} {'Product':<24} {'Available':>10} {'Returned':>10} {'Unit':<5}")
    click.echo(f"  {'-'*59}")
    for item in items:
        marker = "*" if item.has_returns else " "
        click.echo(
            f"{marker} {item.id:<6} {item.name:<24} {item.available:>10} "
            f"{item.returned:>10} {item.unit:<5}"
        )


@click.command("create")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_id", default=None, help="Warehouse ID.")
@click.option("--stock", type=DECIMAL, required=True, help="Packages received.")
@click.option("--expires", type=ISO_DATE, default=None, help="Expiry date (YYYY-MM-DD).")
def lot_create(product_id, warehouse_id, stock, expires) -> None:
    """Receive a new lot of a product."""
    handler = CreateLotHandler(uow=unit_of_work(), lot_store=lot_store())

    try:
        dto = handler.handle(
            product_id=product_id,
            warehouse_id=warehouse_id,
            stock=stock,
            expires_on=expires.date() if expires else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Lot #{dto.id} created with {dto.available_quantity} units available.")


@click.command("update")
@click.option("--id", "lot_id", required=True, help="Lot ID.")
@click.option("--warehouse", "warehouse_id", default=None, help="New warehouse ID.")
@click.option("--stock", type=DECIMAL, default=None, help="New package count.")
@click.option("--expires", type=ISO_DATE, default=None, help="New expiry date.")
@click.option("--clear-expiry", is_flag=True, default=False, help="Remove the expiry date.")
@click.option("--name", default=None, help="New product name.")
@click.option("--price", type=DECIMAL, default=None, help="New product price.")
@click.option("--capacity", type=DECIMAL, default=None, help="New presentation capacity.")
@click.option("--by", "acting_dni", type=int, default=None, help="DNI of the user adjusting.")
def lot_update(lot_id, warehouse_id, stock, expires, clear_expiry, name, price, capacity, acting_dni) -> None:
    """Adjust a lot (and its product data)."""
    if clear_expiry and expires:
        raise click.ClickException("--expires and --clear-expiry are mutually exclusive")
    expires_on = UNSET
    if clear_expiry:
        expires_on = None
    elif expires:
        expires_on = expires.date()

    patch = LotPatch(
        warehouse_id=warehouse_id,
        stock=stock,
        expires_on=expires_on,
        name=name,
        purchase_price=price,
        presentation_capacity=capacity,
    )
    handler = UpdateLotHandler(uow=unit_of_work(), lot_store=lot_store())

    try:
        dto = handler.handle(lot_id, patch, acting_dni=acting_dni)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Lot #{dto.id} updated: {dto.available_quantity} fresh, "
        f"{dto.partial_quantity} returned."
    )


@click.command("remove")
@click.option("--id", "lot_id", required=True, help="Lot ID.")
def lot_remove(lot_id: str) -> None:
    """Delete an empty lot with no active reservations."""
    handler = RemoveLotHandler(uow=unit_of_work(), lot_store=lot_store())

    try:
        handler.handle(lot_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Lot #{lot_id} removed.")


@click.command("search")
@click.argument("query", required=False, default="")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=10, show_default=True)
def lot_search(query: str, page: int, limit: int) -> None:
    """Search products with stock available for reservation."""
    handler = SearchInventoryHandler(lot_store=lot_store())

    try:
        items, total = handler.search(query, page, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not items:
        click.echo("No products with available stock.")
        return
    _display_availability(items)
    click.echo(f"  Page {page}, {len(items)} of {total} products (* has returned stock)")


@click.command("available")
def lot_available() -> None:
    """List every product with stock available for reservation."""
    items = SearchInventoryHandler(lot_store=lot_store()).available()

    if not items:
        click.echo("No products with available stock.")
        return
    _display_availability(items)


@click.command("list")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=10, show_default=True)
def lot_list(page: int, limit: int) -> None:
    """List lots with their stock and reserved quantities."""
    handler = SearchInventoryHandler(lot_store=lot_store())

    try:
        lines, total = handler.lots(page, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No lots found.")
        return

    click.echo(
        f"  {'ID':<6} {'Product':<24} {'Stock':>8} {'Total':>10} "
        f"{'Reserved':>10} {'Reservable':>11} {'Unit':<5}"
    )
    click.echo(f"  {'-'*79}")
    for line in lines:
        click.echo(
            f"  {line.id:<6} {line.product_name:<24} {line.stock:>8} {line.stock_total:>10} "
            f"{line.reserved:>10} {line.reservable:>11} {line.unit:<5}"
        )
    click.echo(f"  Page {page}, {len(lines)} of {total} lots")
