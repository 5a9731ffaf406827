"""Pricing policy data: quantity breakpoints and the size discount curve.

Both are plain data objects injected into the pricing engine, so a
change of pricing policy never touches the engine or the normalizer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from stickers.domain.exceptions import ValidationError


@dataclass(frozen=True)
class RateTable:
    """Dollar-per-square-foot rates keyed by quantity breakpoint.

    Lookup is exact-match only.  A quantity that is not a breakpoint is
    priced at the *smallest* breakpoint's rate, never interpolated.
    """

    rates: Mapping[int, Decimal]

    def __post_init__(self) -> None:
        if not self.rates:
            raise ValidationError("Rate table must contain at least one breakpoint")
        for quantity, rate in self.rates.items():
            if quantity <= 0:
                raise ValidationError(f"Breakpoint must be positive, got {quantity}")
            if not rate.is_finite() or rate <= 0:
                raise ValidationError(
                    f"Rate for breakpoint {quantity} must be positive, got {rate}"
                )
        # Freeze a sorted copy so iteration order is stable.
        object.__setattr__(self, "rates", dict(sorted(self.rates.items())))

    @property
    def breakpoints(self) -> list[int]:
        return list(self.rates)

    @property
    def smallest_breakpoint(self) -> int:
        return self.breakpoints[0]

    def rate_for(self, quantity: int) -> Decimal:
        """Return the rate for *quantity*, falling back to the smallest tier."""
        rate = self.rates.get(quantity)
        if rate is None:
            return self.rates[self.smallest_breakpoint]
        return rate

    @staticmethod
    def of(rates: Mapping[int, str | int | Decimal]) -> RateTable:
        return RateTable({int(q): Decimal(str(r)) for q, r in rates.items()})


DEFAULT_RATE_TABLE = RateTable.of(
    {
        50: "12.75",
        100: "11.50",
        250: "10.50",
        500: "9.75",
        1000: "9.00",
    }
)

DEFAULT_MINIMUM_TOTAL_CENTS = 3000


@dataclass(frozen=True)
class SizeCurve:
    """Piecewise-linear size discount.

    Full price up to ``full_price_area`` square inches, ramping linearly
    down to ``floor`` at ``floor_area`` and flat beyond it.
    """

    full_price_area: Decimal = field(default=Decimal("9"))
    floor_area: Decimal = field(default=Decimal("16"))
    floor: Decimal = field(default=Decimal("0.80"))

    def __post_init__(self) -> None:
        if self.floor_area <= self.full_price_area:
            raise ValidationError("Size curve floor area must exceed full-price area")
        if not Decimal("0") < self.floor <= Decimal("1"):
            raise ValidationError(f"Size curve floor must be in (0, 1], got {self.floor}")

    def multiplier(self, area_in2: Decimal) -> Decimal:
        span = self.floor_area - self.full_price_area
        t = (area_in2 - self.full_price_area) / span
        t = min(max(t, Decimal("0")), Decimal("1"))
        return Decimal("1") - (Decimal("1") - self.floor) * t


DEFAULT_SIZE_CURVE = SizeCurve()
