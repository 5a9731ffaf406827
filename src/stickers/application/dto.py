"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class QuoteDTO:
    """Output: a price quote as displayed to the user."""

    width_in: str
    height_in: str
    quantity: int
    area_in2: str
    rate_per_sqft: str  # formatted, e.g. "$12.75"
    size_multiplier: str
    unit_price: str
    total: str
    unit_cents: int
    total_cents: int
    minimum_applied: bool


@dataclass(frozen=True)
class CheckoutDTO:
    """Output: a created checkout session."""

    url: str
    job_name: str
    quantity: int
    unit_cents: int
    total_cents: int
    total: str


def format_number(value: Decimal) -> str:
    """Render a Decimal without exponent or trailing zeros ("3.50" -> "3.5")."""
    return format(value.normalize(), "f")
