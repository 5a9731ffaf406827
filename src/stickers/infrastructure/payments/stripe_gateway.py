"""Stripe-backed implementation of CheckoutGateway."""

from __future__ import annotations

import logging
from typing import Any

import stripe

from stickers.domain.exceptions import UpstreamError
from stickers.domain.gateway.checkout_gateway import (
    CheckoutGateway,
    CheckoutSessionRequest,
)

logger = logging.getLogger(__name__)


class StripeCheckoutGateway(CheckoutGateway):

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    # --- CheckoutGateway interface --------------------------------------------

    def create_session(self, request: CheckoutSessionRequest) -> str:
        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key,
                **self._to_params(request),
            )
        except stripe.StripeError as exc:
            logger.error("Stripe checkout session failed: %s", exc)
            raise UpstreamError("Payment provider could not start checkout") from exc

        url = getattr(session, "url", None)
        if not url:
            logger.error("Stripe checkout session %s has no URL", getattr(session, "id", "?"))
            raise UpstreamError("Payment provider returned no checkout URL")
        return url

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_params(request: CheckoutSessionRequest) -> dict[str, Any]:
        return {
            "mode": "payment",
            "payment_method_types": ["card"],
            "billing_address_collection": "required",
            "line_items": [
                {
                    "price_data": {
                        "currency": request.currency,
                        "product_data": {
                            "name": request.product_name,
                            "description": request.description,
                        },
                        "unit_amount": request.amount_cents,
                    },
                    "quantity": request.line_quantity,
                }
            ],
            "metadata": dict(request.metadata),
            "success_url": request.success_url,
            "cancel_url": request.cancel_url,
        }
