"""Normalized sticker order.

Every accepted payload shape is resolved into this one canonical form
before anything is priced or sent to the payment provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

DEFAULT_JOB_NAME = ""
DEFAULT_UPLOAD_SOURCE = "File Request Pro"


@dataclass(frozen=True)
class NormalizedOrder:
    """A validated order as the client described it.

    ``total_cents`` and ``unit_cents`` are what the client *claims* the
    order costs.  They are kept for reconciliation only; the amount that
    is charged always comes from a fresh PriceQuote.
    """

    width_in: Decimal
    height_in: Decimal
    quantity: int
    total_cents: int
    job_name: str = DEFAULT_JOB_NAME
    upload_source: str = DEFAULT_UPLOAD_SOURCE
    unit_cents: int | None = None
