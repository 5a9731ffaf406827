"""Serverless-style request handler for the create-checkout endpoint.

Maps an HTTP method, headers and body onto the Create Checkout use case
and turns domain exceptions into JSON error responses.  The hosting
platform (a function runtime, a WSGI shim, ...) only has to call
``handle_request`` and copy the HttpResponse back out.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from stickers.domain.exceptions import (
    ConfigurationError,
    UpstreamError,
    ValidationError,
)
from stickers.domain.gateway.checkout_gateway import CheckoutGateway
from stickers.infrastructure import bootstrap
from stickers.infrastructure.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


def cors_headers(origin: str, config: Settings) -> dict[str, str]:
    """Echo an allowed origin, otherwise pin to the primary site."""
    if config.allow_all_origins:
        allow_origin = "*"
    elif origin in config.allowed_origins:
        allow_origin = origin
    else:
        allow_origin = config.allowed_origins[0] if config.allowed_origins else ""

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Vary": "Origin",
        "Content-Type": "application/json; charset=utf-8",
    }


def handle_request(
    method: str,
    headers: Mapping[str, str] | None,
    body: str | bytes | None,
    config: Settings | None = None,
    gateway_factory: Callable[[Settings], CheckoutGateway] = bootstrap.checkout_gateway,
) -> HttpResponse:
    origin = _header(headers, "origin")
    if config is None:
        try:
            config = bootstrap.settings()
        except ConfigurationError as exc:
            logger.error("Checkout misconfigured: %s", exc)
            return _json(500, cors_headers(origin, Settings()), {"error": str(exc)})
    response_headers = cors_headers(origin, config)

    method = (method or "").upper()
    if method == "OPTIONS":
        return HttpResponse(200, response_headers, "")
    if method != "POST":
        return _json(200, response_headers, {"message": "Use POST to create a checkout session."})

    try:
        gateway = gateway_factory(config)
    except ConfigurationError as exc:
        logger.error("Checkout misconfigured: %s", exc)
        return _json(500, response_headers, {"error": str(exc)})

    try:
        payload = json.loads(body or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _json(400, response_headers, {"error": "Invalid JSON body."})

    handler = bootstrap.checkout_handler(config, gateway)
    try:
        dto = handler.handle(payload)
    except ValidationError as exc:
        return _json(
            400,
            response_headers,
            {"error": str(exc), "fields": sorted(exc.fields)},
        )
    except ConfigurationError as exc:
        logger.error("Checkout misconfigured: %s", exc)
        return _json(500, response_headers, {"error": str(exc)})
    except UpstreamError as exc:
        return _json(502, response_headers, {"error": str(exc)})

    return _json(
        200,
        response_headers,
        {"url": dto.url, "total_cents": dto.total_cents, "unit_cents": dto.unit_cents},
    )


def _header(headers: Mapping[str, str] | None, name: str) -> str:
    for key, value in (headers or {}).items():
        if key.lower() == name:
            return value or ""
    return ""


def _json(status_code: int, headers: dict[str, str], body: Any) -> HttpResponse:
    return HttpResponse(status_code, headers, json.dumps(body))
