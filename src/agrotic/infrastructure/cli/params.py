"""Shared click parameter types."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

ISO_DATE = click.DateTime(formats=["%Y-%m-%d"])


class DecimalType(click.ParamType):
    name = "decimal"

    def convert(self, value, param, ctx) -> Decimal:
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value))
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid number", param, ctx)


DECIMAL = DecimalType()
