"""Payment gateway port (abstract interface).

Defines the contract the hosted-checkout provider adapters implement, so the
checkout and order lifecycle handlers never talk to a provider SDK directly.
Adapters report provider failures through result objects instead of raising.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

# Substituted by the provider with the real session id on the success redirect
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


@dataclass(frozen=True)
class LineItem:
    name: str
    unit_amount: int  # minor units (pence)
    quantity: int


@dataclass(frozen=True)
class HostedSession:
    """Result of creating a hosted checkout session."""

    success: bool
    session_id: str | None = None
    hosted_url: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class SessionStatus:
    """Payment state of a hosted checkout session."""

    success: bool
    paid: bool = False
    payment_reference: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    """Result of a refund attempt."""

    success: bool
    refund_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract hosted-checkout gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        currency: str,
        customer_email: str | None = None,
    ) -> HostedSession:
        """Create a hosted payment page for the given line items."""
        ...

    @abstractmethod
    def retrieve_session(self, session_id: str) -> SessionStatus:
        """Look up whether a hosted session has been paid."""
        ...

    @abstractmethod
    def create_refund(self, payment_reference: str, idempotency_key: str) -> RefundResult:
        """Refund a captured payment in full."""
        ...
