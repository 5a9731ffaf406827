"""Abstract checkout gateway.

Defined in the domain layer so the domain never depends on a payment
provider SDK.  Concrete implementations (Stripe, in-memory fakes) live
in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CheckoutSessionRequest:
    """Everything a provider needs to mint a hosted checkout page.

    The whole order is charged as a single line of ``amount_cents`` so
    the provider total always equals the server quote exactly.
    """

    product_name: str
    description: str
    amount_cents: int
    currency: str
    success_url: str
    cancel_url: str
    metadata: dict[str, str] = field(default_factory=dict)
    line_quantity: int = 1


class CheckoutGateway(ABC):

    @abstractmethod
    def create_session(self, request: CheckoutSessionRequest) -> str:
        """Create a checkout session and return its redirect URL.

        Raises UpstreamError if the provider call fails.
        """
