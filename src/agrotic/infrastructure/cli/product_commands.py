"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from agrotic.application.add_product import AddProductHandler
from agrotic.domain.exceptions import DomainException
from agrotic.domain.model.product import Category
from agrotic.infrastructure.bootstrap import product_repository, unit_of_work
from agrotic.infrastructure.cli.params import DECIMAL


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Purchase price per package (e.g. 50000).")
@click.option("--capacity", type=DECIMAL, default=None, help="Units per package.")
@click.option("--unit", default="", help="Unit abbreviation (e.g. L, kg).")
@click.option("--sku", default=None, help="Stock keeping unit.")
@click.option("--category", default=None, help="Category name.")
@click.option("--tool", is_flag=True, default=False, help="Non-divisible item costed per use.")
@click.option("--useful-life", type=int, default=None, help="Useful life in uses (tools).")
def product_add(name, price, capacity, unit, sku, category, tool, useful_life) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow=unit_of_work(), product_repo=product_repository())
    category_obj = None
    if category or tool:
        category_obj = Category(id=None, name=category or "Tools", divisible=not tool)

    try:
        product = handler.handle(
            name=name,
            price=price,
            presentation_capacity=capacity,
            category=category_obj,
            sku=sku,
            unit_abbreviation=unit,
            useful_life_uses=useful_life,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.purchase_price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>14} {'Capacity':>9} {'Kind':<6}")
    click.echo("-" * 63)
    for p in products:
        capacity = f"{p.effective_capacity}{p.unit_abbreviation}"
        kind = "unit" if p.is_divisible else "tool"
        click.echo(
            f"{p.id:<6} {p.name:<24} {str(p.purchase_price):>14} {capacity:>9} {kind:<6}"
        )
