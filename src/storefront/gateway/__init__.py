"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- StripeGateway for production, built per call from the current secret key
- FakeGateway for development and testing (``PAYMENT_ADAPTER=fake`` or set_gateway)
"""

import os

from storefront.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway(secret_key: str) -> PaymentGateway:
    """Return the active payment gateway for the given secret key."""
    global _current_gateway
    if _current_gateway is not None:
        return _current_gateway

    adapter = os.environ.get("PAYMENT_ADAPTER", "stripe")
    if adapter == "fake":
        from storefront.gateway.fake_adapter import FakeGateway

        _current_gateway = FakeGateway()
        return _current_gateway
    if adapter == "stripe":
        from storefront.gateway.stripe_adapter import StripeGateway

        return StripeGateway(secret_key)
    raise ValueError(f"Unknown payment adapter: {adapter}")


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
