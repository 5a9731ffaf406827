"""CLI commands for pricing."""

from __future__ import annotations

from decimal import Decimal

import click

from stickers.application.dto import QuoteDTO
from stickers.domain.exceptions import DomainException
from stickers.domain.model.value_objects import Money
from stickers.infrastructure.bootstrap import quote_handler, settings


def _display_quote(dto: QuoteDTO) -> None:
    click.echo(f"{dto.quantity} stickers, {dto.width_in} x {dto.height_in} in")
    click.echo()
    click.echo(f"  {'Area (sq in)':<20} {dto.area_in2:>12}")
    click.echo(f"  {'Rate per sq ft':<20} {dto.rate_per_sqft:>12}")
    click.echo(f"  {'Size multiplier':<20} {dto.size_multiplier:>12}")
    click.echo(f"  {'-'*33}")
    click.echo(f"  {'Price per sticker':<20} {dto.unit_price:>12}")
    click.echo(f"  {'Order Total':<20} {dto.total:>12}")
    if dto.minimum_applied:
        click.echo("  (order minimum applied)")


@click.command("quote")
@click.option("--width", required=True, type=click.FLOAT, help="Width in inches.")
@click.option("--height", required=True, type=click.FLOAT, help="Height in inches.")
@click.option("--quantity", required=True, type=int, help="Number of stickers.")
def quote_price(width: float, height: float, quantity: int) -> None:
    """Quote a sticker order."""
    try:
        handler = quote_handler(settings())
        dto = handler.handle(Decimal(str(width)), Decimal(str(height)), quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_quote(dto)


@click.command("rates")
def show_rates() -> None:
    """Show the quantity tiers and the order minimum."""
    try:
        config = settings()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"  {'Quantity':>8} {'Per sq ft':>12}")
    click.echo(f"  {'-'*21}")
    for quantity, rate in config.rate_table.rates.items():
        click.echo(f"  {quantity:>8} {str(Money.of(rate)):>12}")
    click.echo(f"  {'-'*21}")
    click.echo(f"  Minimum order: {Money(config.minimum_total_cents)}")
    click.echo(
        f"  Quantities off the list are priced at the "
        f"{config.rate_table.smallest_breakpoint} tier."
    )
