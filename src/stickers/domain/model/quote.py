"""Price quote produced by the pricing engine."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stickers.domain.model.value_objects import Money


@dataclass(frozen=True)
class PriceQuote:
    """Server-side price for one order.

    Derived, never persisted: a quote is recomputed on every request.
    The breakdown fields are informational and exist for display.
    """

    unit_cents: int
    total_cents: int
    area_in2: Decimal
    sqft_each: Decimal
    rate_per_sqft: Decimal
    size_multiplier: Decimal
    raw_total_cents: int

    @property
    def minimum_applied(self) -> bool:
        return self.total_cents > self.raw_total_cents

    @property
    def unit_price(self) -> Money:
        return Money(self.unit_cents)

    @property
    def total(self) -> Money:
        return Money(self.total_cents)
