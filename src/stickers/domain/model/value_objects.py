"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from stickers.domain.exceptions import ValidationError

CURRENCY = "usd"


# Dimensions, quantities and dollar totals must stay below this so every
# intermediate product fits the default 28-digit decimal context.
MAX_PRICEABLE = Decimal("10000000")


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def is_priceable(value: Decimal, scale: int = 1) -> bool:
    """True for a finite value in the open range (0, MAX_PRICEABLE * scale)."""
    return value.is_finite() and Decimal("0") < value < MAX_PRICEABLE * scale


@dataclass(frozen=True)
class Money:
    """Monetary amount held as integer minor-currency units (cents).

    Integer cents avoid the floating-point drift that would be
    unacceptable when the amount is handed to a payment provider.
    """

    cents: int

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise ValidationError(
                f"Money cents must be an int, got {type(self.cents).__name__}"
            )
        if self.cents < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.cents}"
            )

    @property
    def dollars(self) -> Decimal:
        return Decimal(self.cents) / 100

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.dollars:,.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Build from a dollar amount, rounding to the nearest cent."""
        try:
            dollars = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not dollars.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(round_half_up(dollars * 100))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}",
                fields=("quantity",),
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive", fields=("quantity",))

    def __str__(self) -> str:
        return str(self.value)
