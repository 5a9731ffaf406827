"""Domain service: Order Normalizer.

Front-ends in the wild post three incompatible payload shapes:

  flat dollars  {width, height, quantity, total, jobName?, upload_source?}
  flat cents    the same keys plus total_cents and unit_cents
  nested        {order: {...}, pricing: {width_in, height_in, quantity,
                 total_cents, unit_cents}}

Rather than branching per shape, every field is resolved through its own
precedence chain (top level, then ``pricing``, then ``order``) and the
first present value wins.  A client may therefore mix shapes across
fields.  Validation accumulates so one error lists every bad field.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from stickers.domain.exceptions import ValidationError
from stickers.domain.model.order import (
    DEFAULT_JOB_NAME,
    DEFAULT_UPLOAD_SOURCE,
    NormalizedOrder,
)
from stickers.domain.model.value_objects import (
    is_priceable,
    round_half_up,
)

# (section, key) pairs in precedence order; section None is the top level.
Path = tuple[str | None, str]

WIDTH_PATHS: list[Path] = [
    (None, "width"),
    ("pricing", "width_in"),
    ("pricing", "width"),
    ("order", "width_in"),
    ("order", "width"),
]
HEIGHT_PATHS: list[Path] = [
    (None, "height"),
    ("pricing", "height_in"),
    ("pricing", "height"),
    ("order", "height_in"),
    ("order", "height"),
]
QUANTITY_PATHS: list[Path] = [
    (None, "quantity"),
    ("pricing", "quantity"),
    ("order", "quantity"),
]
TOTAL_DOLLARS_PATHS: list[Path] = [
    (None, "total"),
    ("pricing", "total"),
    ("order", "total"),
]
TOTAL_CENTS_PATHS: list[Path] = [
    (None, "total_cents"),
    ("pricing", "total_cents"),
    ("order", "total_cents"),
]
UNIT_CENTS_PATHS: list[Path] = [
    (None, "unit_cents"),
    ("pricing", "unit_cents"),
    ("order", "unit_cents"),
]
JOB_NAME_PATHS: list[Path] = [
    (None, "jobName"),
    (None, "job_name"),
    ("order", "project_name"),
    ("order", "jobName"),
    ("order", "job_name"),
]
UPLOAD_SOURCE_PATHS: list[Path] = [
    (None, "upload_source"),
    ("order", "upload_source"),
]

# Reporting order for error messages.
REQUIRED_FIELDS = ("width", "height", "quantity", "total")

_MISSING = object()


def normalize(raw: Mapping[str, Any]) -> NormalizedOrder:
    """Resolve *raw* into a NormalizedOrder.

    Raises ValidationError listing every missing or invalid field.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError(
            "Order payload must be a JSON object",
            fields=REQUIRED_FIELDS,
        )

    bad: set[str] = set()

    width = _positive_number(raw, WIDTH_PATHS)
    if width is None:
        bad.add("width")

    height = _positive_number(raw, HEIGHT_PATHS)
    if height is None:
        bad.add("height")

    quantity = _positive_number(raw, QUANTITY_PATHS)
    if quantity is None or quantity != quantity.to_integral_value():
        bad.add("quantity")

    total_cents = _total_cents(raw)
    if total_cents is None:
        bad.add("total")

    unit_cents: int | None = None
    unit_value = _resolve(raw, UNIT_CENTS_PATHS)
    if unit_value is not _MISSING:
        unit = _coerce_positive(unit_value, scale=100)
        if unit is None or round_half_up(unit) < 1:
            bad.add("unit_cents")
        else:
            unit_cents = round_half_up(unit)

    if bad:
        ordered = [f for f in REQUIRED_FIELDS if f in bad] + sorted(
            bad.difference(REQUIRED_FIELDS)
        )
        raise ValidationError(
            f"Missing or invalid field(s): {', '.join(ordered)}",
            fields=bad,
        )

    return NormalizedOrder(
        width_in=width,
        height_in=height,
        quantity=int(quantity),
        total_cents=total_cents,
        job_name=_text(raw, JOB_NAME_PATHS, DEFAULT_JOB_NAME),
        upload_source=_text(raw, UPLOAD_SOURCE_PATHS, DEFAULT_UPLOAD_SOURCE),
        unit_cents=unit_cents,
    )


# --- Resolution ---------------------------------------------------------------


def _resolve(raw: Mapping[str, Any], paths: list[Path]) -> Any:
    """Return the first present (non-None) value along *paths*."""
    for section, key in paths:
        if section is None:
            container = raw
        else:
            container = raw.get(section)
            if not isinstance(container, Mapping):
                continue
        value = container.get(key)
        if value is not None:
            return value
    return _MISSING


def _positive_number(
    raw: Mapping[str, Any], paths: list[Path], scale: int = 1
) -> Decimal | None:
    value = _resolve(raw, paths)
    if value is _MISSING:
        return None
    return _coerce_positive(value, scale)


def _total_cents(raw: Mapping[str, Any]) -> int | None:
    """Resolve the client total, always in cents.

    A dollars value anywhere in its chain is authoritative: once one is
    present the cents chain is never consulted, even if the dollars
    value is invalid, because the two may describe different money.
    """
    dollars = _resolve(raw, TOTAL_DOLLARS_PATHS)
    if dollars is not _MISSING:
        amount = _coerce_positive(dollars)
        cents = None if amount is None else round_half_up(amount * 100)
    else:
        amount = _positive_number(raw, TOTAL_CENTS_PATHS, scale=100)
        cents = None if amount is None else round_half_up(amount)
    if cents is None or cents < 1:
        return None
    return cents


def _text(raw: Mapping[str, Any], paths: list[Path], default: str) -> str:
    for section, key in paths:
        container = raw if section is None else raw.get(section)
        if not isinstance(container, Mapping):
            continue
        value = container.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return default


# --- Coercion -----------------------------------------------------------------


def _coerce_positive(value: Any, scale: int = 1) -> Decimal | None:
    """Coerce *value* to a finite positive Decimal, or None if it is not one.

    Values at or above MAX_PRICEABLE (times *scale* for amounts already in
    cents) are rejected as too large to price.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        return None
    try:
        number = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not is_priceable(number, scale):
        return None
    return number
