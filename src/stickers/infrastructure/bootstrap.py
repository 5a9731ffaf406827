"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stickers.application.create_checkout import CreateCheckoutHandler
from stickers.application.quote_price import QuotePriceHandler
from stickers.domain.gateway.checkout_gateway import CheckoutGateway
from stickers.infrastructure.config import Settings
from stickers.infrastructure.payments.stripe_gateway import StripeCheckoutGateway


def settings() -> Settings:
    return Settings.from_env()


def checkout_gateway(config: Settings) -> StripeCheckoutGateway:
    return StripeCheckoutGateway(api_key=config.require_stripe_key())


def quote_handler(config: Settings) -> QuotePriceHandler:
    return QuotePriceHandler(
        rate_table=config.rate_table,
        minimum_total_cents=config.minimum_total_cents,
    )


def checkout_handler(config: Settings, gateway: CheckoutGateway | None = None) -> CreateCheckoutHandler:
    return CreateCheckoutHandler(
        gateway=gateway if gateway is not None else checkout_gateway(config),
        rate_table=config.rate_table,
        minimum_total_cents=config.minimum_total_cents,
        success_url=config.success_url,
        cancel_url=config.cancel_url,
        tolerance_cents=config.tolerance_cents,
    )
