"""Application service: Quote Price use case.

Prices dimensions entered directly (the CLI ``quote`` command) rather
than a client payload, so there is no client total to reconcile.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from stickers.application.dto import QuoteDTO, format_number
from stickers.domain.exceptions import ValidationError
from stickers.domain.model.quote import PriceQuote
from stickers.domain.model.rate_table import (
    DEFAULT_SIZE_CURVE,
    RateTable,
    SizeCurve,
)
from stickers.domain.model.value_objects import (
    MAX_PRICEABLE,
    Money,
    Quantity,
    is_priceable,
)
from stickers.domain.service.pricing_engine import quote

logger = logging.getLogger(__name__)


class QuotePriceHandler:

    def __init__(
        self,
        rate_table: RateTable,
        minimum_total_cents: int,
        size_curve: SizeCurve = DEFAULT_SIZE_CURVE,
    ) -> None:
        self._rate_table = rate_table
        self._minimum_total_cents = minimum_total_cents
        self._size_curve = size_curve

    def handle(self, width_in: Decimal, height_in: Decimal, quantity: int) -> QuoteDTO:
        bad = [
            name
            for name, value in (("width", width_in), ("height", height_in))
            if not is_priceable(value)
        ]
        if bad:
            raise ValidationError(
                f"{' and '.join(bad).capitalize()} must be positive "
                f"and below {MAX_PRICEABLE:,} in",
                fields=bad,
            )
        qty = Quantity(quantity)
        if not is_priceable(Decimal(qty.value)):
            raise ValidationError(
                f"Quantity must be below {MAX_PRICEABLE:,}", fields=("quantity",)
            )

        result = quote(
            width_in,
            height_in,
            qty.value,
            self._rate_table,
            self._minimum_total_cents,
            self._size_curve,
        )
        logger.debug(
            "Quoted %s x %s in x %d: %d cents", width_in, height_in, qty.value, result.total_cents
        )
        return self._to_dto(width_in, height_in, qty.value, result)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(
        width_in: Decimal, height_in: Decimal, quantity: int, result: PriceQuote
    ) -> QuoteDTO:
        return QuoteDTO(
            width_in=format_number(width_in),
            height_in=format_number(height_in),
            quantity=quantity,
            area_in2=format_number(result.area_in2),
            rate_per_sqft=str(Money.of(result.rate_per_sqft)),
            size_multiplier=f"{result.size_multiplier:.2f}",
            unit_price=str(result.unit_price),
            total=str(result.total),
            unit_cents=result.unit_cents,
            total_cents=result.total_cents,
            minimum_applied=result.minimum_applied,
        )
