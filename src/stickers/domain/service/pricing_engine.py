"""Domain service: Pricing Engine.

Turns validated dimensions and a quantity into a PriceQuote.  Pure and
deterministic: no I/O, no state, same input always gives the same quote.

Steps:
  1. area and square feet per sticker
  2. exact-match tier rate (smallest tier when the quantity is off-grid)
  3. size multiplier applied to the per-sticker price
  4. raw total rounded to cents, then lifted to the order minimum
  5. unit price recomputed from the enforced total so unit x quantity
     reconciles with the displayed total
"""

from __future__ import annotations

from decimal import Decimal

from stickers.domain.model.quote import PriceQuote
from stickers.domain.model.rate_table import (
    DEFAULT_SIZE_CURVE,
    RateTable,
    SizeCurve,
)
from stickers.domain.model.value_objects import round_half_up

SQUARE_INCHES_PER_SQFT = Decimal("144")


def size_multiplier(area_in2: Decimal | int | float, curve: SizeCurve = DEFAULT_SIZE_CURVE) -> Decimal:
    return curve.multiplier(Decimal(str(area_in2)))


def quote(
    width_in: Decimal,
    height_in: Decimal,
    quantity: int,
    rate_table: RateTable,
    minimum_total_cents: int,
    size_curve: SizeCurve = DEFAULT_SIZE_CURVE,
) -> PriceQuote:
    """Price *quantity* stickers of *width_in* x *height_in* inches.

    Callers must pass positive, finite dimensions and a positive quantity;
    the order normalizer guarantees this for request payloads.
    """
    area_in2 = Decimal(str(width_in)) * Decimal(str(height_in))
    sqft_each = area_in2 / SQUARE_INCHES_PER_SQFT

    rate = rate_table.rate_for(quantity)
    multiplier = size_curve.multiplier(area_in2)
    unit_dollars = sqft_each * rate * multiplier

    raw_total_cents = round_half_up(unit_dollars * quantity * 100)
    total_cents = max(raw_total_cents, minimum_total_cents)
    unit_cents = max(1, round_half_up(Decimal(total_cents) / quantity))

    return PriceQuote(
        unit_cents=unit_cents,
        total_cents=total_cents,
        area_in2=area_in2,
        sqft_each=sqft_each,
        rate_per_sqft=rate,
        size_multiplier=multiplier,
        raw_total_cents=raw_total_cents,
    )
