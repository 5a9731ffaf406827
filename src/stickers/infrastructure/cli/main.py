import logging

import click

from stickers.infrastructure.cli.checkout_commands import checkout_create
from stickers.infrastructure.cli.quote_commands import quote_price, show_rates


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Sticker order pricing and checkout"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
cli.add_command(quote_price)
cli.add_command(show_rates)
cli.add_command(checkout_create)
