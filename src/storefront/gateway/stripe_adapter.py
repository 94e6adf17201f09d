"""Stripe Checkout gateway adapter.

Uses a per-instance ``stripe.StripeClient`` so the secret key read from the
settings store at request time is the one used, with a bounded HTTP timeout
and no automatic network retries.
"""

import os

import stripe
import structlog

from storefront.gateway.port import HostedSession, LineItem, PaymentGateway, RefundResult, SessionStatus

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 20


class StripeGateway(PaymentGateway):
    """Production gateway backed by Stripe Checkout Sessions and Refunds."""

    def __init__(self, secret_key: str, timeout: float | None = None) -> None:
        timeout = timeout or float(os.getenv("PAYMENT_TIMEOUT", DEFAULT_TIMEOUT))
        self._client = stripe.StripeClient(
            secret_key,
            http_client=stripe.RequestsClient(timeout=timeout),
            max_network_retries=0,
        )

    def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        currency: str,
        customer_email: str | None = None,
    ) -> HostedSession:
        params = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": currency.lower(),
                        "product_data": {"name": item.name},
                        "unit_amount": item.unit_amount,
                    },
                    "quantity": item.quantity,
                }
                for item in line_items
            ],
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if customer_email:
            params["customer_email"] = customer_email

        try:
            session = self._client.v1.checkout.sessions.create(params=params)
        except stripe.StripeError as exc:
            logger.error("Stripe session creation failed", error=str(exc), error_type=type(exc).__name__)
            return HostedSession(success=False, failure_reason=str(exc))

        return HostedSession(success=True, session_id=session.id, hosted_url=session.url)

    def retrieve_session(self, session_id: str) -> SessionStatus:
        try:
            session = self._client.v1.checkout.sessions.retrieve(session_id)
        except stripe.StripeError as exc:
            logger.error("Stripe session retrieval failed", session_id=session_id, error=str(exc))
            return SessionStatus(success=False, failure_reason=str(exc))

        payment_intent = session.payment_intent
        if payment_intent is not None and not isinstance(payment_intent, str):
            payment_intent = payment_intent.id

        return SessionStatus(
            success=True,
            paid=session.payment_status == "paid",
            payment_reference=payment_intent,
        )

    def create_refund(self, payment_reference: str, idempotency_key: str) -> RefundResult:
        try:
            refund = self._client.v1.refunds.create(
                params={"payment_intent": payment_reference},
                options={"idempotency_key": idempotency_key},
            )
        except stripe.StripeError as exc:
            logger.error("Stripe refund failed", payment_reference=payment_reference, error=str(exc))
            return RefundResult(success=False, failure_reason=str(exc))

        if refund.status in ("failed", "canceled"):
            return RefundResult(success=False, refund_id=refund.id, failure_reason=refund.failure_reason)
        return RefundResult(success=True, refund_id=refund.id)
