"""Environment-supplied configuration.

Pricing policy, redirect URLs, CORS origins and the Stripe credential
all come from the environment; nothing here is business logic.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from stickers.domain.exceptions import ConfigurationError, ValidationError
from stickers.domain.model.rate_table import (
    DEFAULT_MINIMUM_TOTAL_CENTS,
    DEFAULT_RATE_TABLE,
    RateTable,
)

DEFAULT_SUCCESS_URL = "https://www.unfoldingcreative.com/order-success"
DEFAULT_CANCEL_URL = "https://www.unfoldingcreative.com/orderstickers"
DEFAULT_ALLOWED_ORIGINS = (
    "https://www.unfoldingcreative.com",
    "https://unfoldingcreative.com",
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    rate_table: RateTable = DEFAULT_RATE_TABLE
    minimum_total_cents: int = DEFAULT_MINIMUM_TOTAL_CENTS
    tolerance_cents: int = 1
    success_url: str = DEFAULT_SUCCESS_URL
    cancel_url: str = DEFAULT_CANCEL_URL
    allowed_origins: tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    allow_all_origins: bool = False
    stripe_secret_key: str | None = field(default=None, repr=False)

    def require_stripe_key(self) -> str:
        if not self.stripe_secret_key:
            raise ConfigurationError("Missing STRIPE_SECRET_KEY environment variable")
        return self.stripe_secret_key

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        rate_table = DEFAULT_RATE_TABLE
        if env.get("STICKER_RATE_TABLE", "").strip():
            rate_table = parse_rate_table(env["STICKER_RATE_TABLE"])

        origins = DEFAULT_ALLOWED_ORIGINS
        if env.get("ALLOWED_ORIGINS", "").strip():
            origins = tuple(
                o.strip() for o in env["ALLOWED_ORIGINS"].split(",") if o.strip()
            )

        return Settings(
            rate_table=rate_table,
            minimum_total_cents=_int(
                env, "STICKER_MIN_TOTAL_CENTS", DEFAULT_MINIMUM_TOTAL_CENTS, minimum=1
            ),
            tolerance_cents=_int(env, "STICKER_PRICE_TOLERANCE_CENTS", 1, minimum=0),
            success_url=env.get("CHECKOUT_SUCCESS_URL", "").strip() or DEFAULT_SUCCESS_URL,
            cancel_url=env.get("CHECKOUT_CANCEL_URL", "").strip() or DEFAULT_CANCEL_URL,
            allowed_origins=origins,
            allow_all_origins=_bool(env, "ALLOW_ALL_ORIGINS"),
            stripe_secret_key=env.get("STRIPE_SECRET_KEY", "").strip() or None,
        )


def parse_rate_table(raw: str) -> RateTable:
    """Parse '50:12.75,100:11.50' into a RateTable."""
    rates: dict[int, Decimal] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise ConfigurationError(
                f"Invalid rate '{pair}'. Expected 'Quantity:DollarsPerSqft'."
            )
        qty_str, rate_str = pair.split(":", 1)
        try:
            rates[int(qty_str)] = Decimal(rate_str.strip())
        except (ValueError, InvalidOperation) as exc:
            raise ConfigurationError(f"Invalid rate '{pair}' in STICKER_RATE_TABLE") from exc
    try:
        return RateTable(rates)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid STICKER_RATE_TABLE: {exc}") from exc


def _int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")
    return value


def _bool(env: Mapping[str, str], name: str) -> bool:
    raw = env.get(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be true or false, got {raw!r}")
