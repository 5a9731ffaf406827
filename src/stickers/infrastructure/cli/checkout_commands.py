"""CLI commands for checkout."""

from __future__ import annotations

import json

import click

from stickers.domain.exceptions import DomainException, ValidationError
from stickers.infrastructure.bootstrap import checkout_handler, settings


@click.command("checkout")
@click.option(
    "--payload",
    "payload_file",
    required=True,
    type=click.File("r"),
    help="Order payload JSON file ('-' for stdin).",
)
def checkout_create(payload_file) -> None:
    """Create a checkout session and print its redirect URL."""
    try:
        payload = json.load(payload_file)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON payload: {exc}")

    try:
        handler = checkout_handler(settings())
        dto = handler.handle(payload)
    except ValidationError as exc:
        fields = ", ".join(sorted(exc.fields))
        raise click.ClickException(f"{exc} [{fields}]" if fields else str(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Checkout ready: {dto.quantity} stickers, total {dto.total}")
    if dto.job_name:
        click.echo(f"Job: {dto.job_name}")
    click.echo(dto.url)
