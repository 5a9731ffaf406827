"""Application service: Create Checkout use case.

Orchestrates the flow from an untrusted request payload to a payment
provider redirect URL:

1. Normalize the payload (fail with every bad field at once).
2. Re-price the order server-side from its dimensions and quantity.
3. Reconcile the client's claimed total/unit price with the quote.
4. Build the checkout session request and hand it to the gateway.

The client total is never charged as-is; the server quote is.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from stickers.application.dto import CheckoutDTO, format_number
from stickers.domain.exceptions import ValidationError
from stickers.domain.gateway.checkout_gateway import (
    CheckoutGateway,
    CheckoutSessionRequest,
)
from stickers.domain.model.order import NormalizedOrder
from stickers.domain.model.quote import PriceQuote
from stickers.domain.model.rate_table import (
    DEFAULT_SIZE_CURVE,
    RateTable,
    SizeCurve,
)
from stickers.domain.model.value_objects import CURRENCY, Money
from stickers.domain.service.order_normalizer import normalize
from stickers.domain.service.pricing_engine import quote

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Custom Stickers"


class CreateCheckoutHandler:

    def __init__(
        self,
        gateway: CheckoutGateway,
        rate_table: RateTable,
        minimum_total_cents: int,
        success_url: str,
        cancel_url: str,
        tolerance_cents: int = 1,
        size_curve: SizeCurve = DEFAULT_SIZE_CURVE,
    ) -> None:
        self._gateway = gateway
        self._rate_table = rate_table
        self._minimum_total_cents = minimum_total_cents
        self._success_url = success_url
        self._cancel_url = cancel_url
        self._tolerance_cents = tolerance_cents
        self._size_curve = size_curve

    def handle(self, raw: Mapping[str, Any]) -> CheckoutDTO:
        try:
            order = normalize(raw)
        except ValidationError as exc:
            logger.warning("Rejected order payload: %s", exc)
            raise

        price = quote(
            order.width_in,
            order.height_in,
            order.quantity,
            self._rate_table,
            self._minimum_total_cents,
            self._size_curve,
        )
        self._reconcile(order, price)

        request = self._build_request(order, price)
        url = self._gateway.create_session(request)
        logger.info(
            "Checkout session created for %d stickers (%s x %s in), %d cents",
            order.quantity,
            order.width_in,
            order.height_in,
            price.total_cents,
        )

        return CheckoutDTO(
            url=url,
            job_name=order.job_name,
            quantity=order.quantity,
            unit_cents=price.unit_cents,
            total_cents=price.total_cents,
            total=str(price.total),
        )

    # --- Reconciliation -------------------------------------------------------

    def _reconcile(self, order: NormalizedOrder, price: PriceQuote) -> None:
        """Reject a client price that drifts from the quote beyond tolerance."""
        problems: list[str] = []
        fields: list[str] = []

        if abs(order.total_cents - price.total_cents) > self._tolerance_cents:
            problems.append(
                f"total {Money(order.total_cents)} does not match "
                f"computed price {price.total}"
            )
            fields.append("total")

        if (
            order.unit_cents is not None
            and abs(order.unit_cents - price.unit_cents) > self._tolerance_cents
        ):
            problems.append(
                f"unit price {Money(order.unit_cents)} does not match "
                f"computed unit price {price.unit_price}"
            )
            fields.append("unit_cents")

        if problems:
            logger.warning(
                "Price mismatch for %d stickers (%s x %s in): %s",
                order.quantity,
                order.width_in,
                order.height_in,
                "; ".join(problems),
            )
            raise ValidationError(
                "Price mismatch: " + "; ".join(problems), fields=fields
            )

    # --- Mapping --------------------------------------------------------------

    def _build_request(
        self, order: NormalizedOrder, price: PriceQuote
    ) -> CheckoutSessionRequest:
        width = format_number(order.width_in)
        height = format_number(order.height_in)
        return CheckoutSessionRequest(
            product_name=PRODUCT_NAME,
            description=f"{order.quantity} stickers - {width} x {height} in",
            amount_cents=price.total_cents,
            currency=CURRENCY,
            success_url=self._success_url,
            cancel_url=self._cancel_url,
            metadata={
                "job_name": order.job_name,
                "width": width,
                "height": height,
                "quantity": str(order.quantity),
                "upload_source": order.upload_source,
                "unit_cents": str(price.unit_cents),
                "total_cents": str(price.total_cents),
            },
        )
