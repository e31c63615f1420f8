import click

from agrotic.config import settings
from agrotic.infrastructure.cli.activity_commands import (
    activity_by_date,
    activity_by_zone,
    activity_cost,
    activity_create,
    activity_finalize,
    activity_remove,
    activity_show,
    activity_update,
)
from agrotic.infrastructure.cli.lot_commands import (
    lot_available,
    lot_create,
    lot_list,
    lot_remove,
    lot_search,
    lot_update,
)
from agrotic.infrastructure.cli.product_commands import product_add, product_list
from agrotic.infrastructure.cli.reservation_commands import (
    reservation_cancel,
    reservation_confirm,
    reservation_list,
    reservation_reserve,
    reservation_reserve_product,
)
from agrotic.infrastructure.logging_config import setup_logging


@click.group()
def cli() -> None:
    """AgroTic: field inventory and activity costing"""
    setup_logging(settings.log_dir, settings.log_level)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def lot() -> None:
    """Manage inventory lots."""


@cli.group()
def reservation() -> None:
    """Reserve, confirm and return inventory."""


@cli.group()
def activity() -> None:
    """Manage field activities."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
lot.add_command(lot_available)
lot.add_command(lot_create)
lot.add_command(lot_list)
lot.add_command(lot_remove)
lot.add_command(lot_search)
lot.add_command(lot_update)
reservation.add_command(reservation_cancel)
reservation.add_command(reservation_confirm)
reservation.add_command(reservation_list)
reservation.add_command(reservation_reserve)
reservation.add_command(reservation_reserve_product)
activity.add_command(activity_by_date)
activity.add_command(activity_by_zone)
activity.add_command(activity_cost)
activity.add_command(activity_create)
activity.add_command(activity_finalize)
activity.add_command(activity_remove)
activity.add_command(activity_show)
activity.add_command(activity_update)
