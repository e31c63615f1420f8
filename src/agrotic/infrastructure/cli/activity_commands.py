"""CLI commands for field activities."""

from __future__ import annotations

import click

from agrotic.application.activity_cost import ActivityCostHandler
from agrotic.application.create_activity import CreateActivityHandler
from agrotic.application.dto import MaterialSpec
from agrotic.application.finalize_activity import FinalizeActivityHandler
from agrotic.application.remove_activity import RemoveActivityHandler
from agrotic.application.show_activities import ShowActivitiesHandler
from agrotic.application.update_activity import (
    UpdateActivityFullHandler,
    UpdateActivityHandler,
)
from agrotic.domain.exceptions import DomainException
from agrotic.domain.model.value_objects import to_decimal
from agrotic.infrastructure.bootstrap import (
    activity_repository,
    assignment_repository,
    lot_repository,
    product_repository,
    reservation_ledger,
    unit_of_work,
    user_directory,
)
from agrotic.infrastructure.cli.params import DECIMAL, ISO_DATE


def _parse_materials(raw: str) -> list[MaterialSpec]:
    """Parse '3:20,7:1.5' (product id:quantity) into MaterialSpec list."""
    specs: list[MaterialSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid material format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = to_decimal(qty_str)
        except DomainException:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(MaterialSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _cost_handler() -> ActivityCostHandler:
    return ActivityCostHandler(
        activity_repo=activity_repository(),
        ledger=reservation_ledger(),
        lot_repo=lot_repository(),
        product_repo=product_repository(),
    )


def _show_handler() -> ShowActivitiesHandler:
    return ShowActivitiesHandler(
        activity_repo=activity_repository(),
        users=user_directory(),
        ledger=reservation_ledger(),
        lot_repo=lot_repository(),
        product_repo=product_repository(),
        cost_handler=_cost_handler(),
    )


def _display_cost(report) -> None:
    click.echo(f"  {'Product':<24} {'Used':>9} {'Unit price':>12} {'Subtotal':>12}")
    click.echo(f"  {'-'*60}")
    for line in report.lines:
        click.echo(
            f"  {line.product_name:<24} {line.used:>9} {line.unit_price:>12} {line.subtotal:>12}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Inputs':<47} {report.inputs_cost:>12}")
    click.echo(f"  {'Labor':<47} {report.labor_cost:>12}")
    click.echo(f"  {'Total':<47} {report.total_cost:>12}")


@click.command("create")
@click.option("--description", required=True, help="What has to be done.")
@click.option("--crop-zone", "crop_zone_id", required=True, help="Crop zone ID.")
@click.option("--category", "category_id", required=True, help="Activity category ID.")
@click.option("--date", "assigned_on", type=ISO_DATE, required=True, help="Assigned date (YYYY-MM-DD).")
@click.option("--responsible", "responsible_dni", type=int, required=True, help="Responsible user's DNI.")
def activity_create(description, crop_zone_id, category_id, assigned_on, responsible_dni) -> None:
    """Create a field activity."""
    handler = CreateActivityHandler(uow=unit_of_work(), activity_repo=activity_repository())

    try:
        dto = handler.handle(
            description=description,
            crop_zone_id=crop_zone_id,
            category_id=category_id,
            assigned_on=assigned_on.date(),
            responsible_dni=responsible_dni,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Activity #{dto.id} created for {dto.assigned_on}  (status={dto.status})")


@click.command("update")
@click.option("--id", "activity_id", required=True, help="Activity ID.")
@click.option("--description", default=None)
@click.option("--crop-zone", "crop_zone_id", default=None)
@click.option("--category", "category_id", default=None)
@click.option("--date", "assigned_on", type=ISO_DATE, default=None)
@click.option("--observation", default=None)
@click.option("--users", default=None, help="Assigned user IDs as '1,2,3' (full update).")
@click.option("--materials", default=None, help="Materials as 'ProductId:Qty,...' (full update).")
def activity_update(activity_id, description, crop_zone_id, category_id, assigned_on,
                    observation, users, materials) -> None:
    """Update an activity.

    With --users or --materials the assigned users and reserved materials
    are reconciled to the given lists.
    """
    day = assigned_on.date() if assigned_on else None

    try:
        if users is not None or materials is not None:
            if observation is not None:
                raise click.ClickException("--observation cannot be combined with a full update")
            handler = UpdateActivityFullHandler(
                uow=unit_of_work(),
                activity_repo=activity_repository(),
                assignment_repo=assignment_repository(),
                lot_repo=lot_repository(),
                ledger=reservation_ledger(),
            )
            dto = handler.handle(
                activity_id,
                description=description,
                crop_zone_id=crop_zone_id,
                category_id=category_id,
                assigned_on=day,
                user_ids=[u.strip() for u in (users or "").split(",") if u.strip()],
                materials=_parse_materials(materials or ""),
            )
        else:
            changes = {
                "description": description,
                "crop_zone_id": crop_zone_id,
                "category_id": category_id,
                "assigned_on": day,
                "observation": observation,
            }
            handler = UpdateActivityHandler(uow=unit_of_work(), activity_repo=activity_repository())
            dto = handler.handle(activity_id, {k: v for k, v in changes.items() if v is not None})
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Activity #{dto.id} updated.")


@click.command("finalize")
@click.option("--id", "activity_id", required=True, help="Activity ID.")
@click.option("--by", "acting_dni", type=int, required=True, help="DNI of the user finalizing.")
@click.option("--observation", default=None)
@click.option("--photo", "photo_url", default=None, help="Evidence photo URL.")
@click.option("--hours", type=DECIMAL, default=None, help="Hours worked.")
@click.option("--rate", "hourly_rate", type=DECIMAL, default=None, help="Hourly labor rate.")
def activity_finalize(activity_id, acting_dni, observation, photo_url, hours, hourly_rate) -> None:
    """Finalize an activity (responsible user only)."""
    handler = FinalizeActivityHandler(uow=unit_of_work(), activity_repo=activity_repository())

    try:
        handler.handle(
            activity_id,
            observation=observation,
            photo_url=photo_url,
            hours=hours,
            hourly_rate=hourly_rate,
            acting_dni=acting_dni,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Activity #{activity_id} finalized.")


@click.command("remove")
@click.option("--id", "activity_id", required=True, help="Activity ID.")
def activity_remove(activity_id) -> None:
    """Delete an activity, returning unconfirmed reservations to stock."""
    handler = RemoveActivityHandler(
        uow=unit_of_work(),
        activity_repo=activity_repository(),
        assignment_repo=assignment_repository(),
        ledger=reservation_ledger(),
    )

    try:
        report = handler.handle(activity_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    returned = sum(1 for r in report.returns if r.ok)
    click.echo(f"Activity #{activity_id} removed; {returned} reservations returned to stock.")
    for failure in report.failures:
        click.echo(f"  warning: {failure.item_id}: {failure.error}", err=True)


@click.command("show")
@click.option("--id", "activity_id", required=True, help="Activity ID.")
def activity_show(activity_id) -> None:
    """Show an activity with its reservations."""
    try:
        dto = _show_handler().find(activity_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Activity #{dto.id}  (status={dto.status})")
    click.echo(f"Description: {dto.description}")
    click.echo(f"Date:        {dto.assigned_on}")
    click.echo(f"Responsible: {dto.responsible_name or dto.responsible_dni}")
    if dto.finished_at:
        click.echo(f"Finished:    {dto.finished_at}")
    click.echo()
    if not dto.reservations:
        click.echo("  No reservations.")
        return
    for r in dto.reservations:
        click.echo(f"  #{r.id:<5} {r.product_name:<24} {r.status:<11} {r.reserved:>9} {r.used or '-':>9}")


@click.command("cost")
@click.option("--id", "activity_id", required=True, help="Activity ID.")
def activity_cost(activity_id) -> None:
    """Show the input and labor cost of an activity."""
    try:
        report = _cost_handler().handle(activity_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Activity #{activity_id} cost")
    _display_cost(report)


@click.command("by-date")
@click.option("--date", "day", type=ISO_DATE, required=True, help="Day (YYYY-MM-DD).")
@click.option("--until", type=ISO_DATE, default=None, help="End of a date range.")
def activity_by_date(day, until) -> None:
    """List active activities assigned on a day or within a range."""
    handler = _show_handler()

    try:
        if until:
            rows = handler.by_date_range(day.date(), until.date())
        else:
            rows = handler.by_date(day.date())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No activities found.")
        return
    for dto in rows:
        click.echo(
            f"  #{dto.id:<5} {dto.assigned_on} {dto.description:<30} "
            f"{dto.responsible_name or dto.responsible_dni}"
        )
    if not until:
        click.echo(f"  {handler.count_by_date(day.date())} activities assigned that day, including finalized.")


@click.command("by-zone")
@click.option("--crop-zone", "crop_zone_id", required=True, help="Crop zone ID.")
def activity_by_zone(crop_zone_id) -> None:
    """List a crop zone's activities, newest first, with costs of finalized ones."""
    rows = _show_handler().by_crop_zone(crop_zone_id)

    if not rows:
        click.echo("No activities found.")
        return
    for dto in rows:
        total = dto.cost.total_cost if dto.cost else "-"
        click.echo(
            f"  #{dto.id:<5} {dto.assigned_on} {dto.status:<10} "
            f"{dto.description:<30} {total:>12}"
        )
