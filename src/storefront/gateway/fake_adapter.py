"""Configurable fake payment gateway for development and testing.

Simulates a hosted-checkout provider without any external calls. Sessions are
kept in memory and can be marked paid, and each operation can be told to fail,
which makes every branch of checkout and refund reachable from tests.
"""

from uuid import uuid4

from storefront.gateway.port import HostedSession, LineItem, PaymentGateway, RefundResult, SessionStatus


class FakeGateway(PaymentGateway):
    """Configurable fake hosted-checkout gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.refund_should_succeed: bool = True
        self.retrieve_should_succeed: bool = True
        self.failure_reason: str = "Provider unavailable"
        self.sessions: dict[str, dict] = {}
        self.refunds: dict[str, RefundResult] = {}
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool = True,
        refund_should_succeed: bool = True,
        retrieve_should_succeed: bool = True,
        failure_reason: str = "Provider unavailable",
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.refund_should_succeed = refund_should_succeed
        self.retrieve_should_succeed = retrieve_should_succeed
        self.failure_reason = failure_reason

    def mark_paid(self, session_id: str, payment_reference: str | None = None) -> str:
        """Simulate the buyer completing payment on the hosted page."""
        reference = payment_reference or f"fake_pi_{uuid4().hex[:12]}"
        self.sessions[session_id]["paid"] = True
        self.sessions[session_id]["payment_reference"] = reference
        return reference

    def calls_to(self, method: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == method]

    def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        currency: str,
        customer_email: str | None = None,
    ) -> HostedSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "line_items": list(line_items),
                "success_url": success_url,
                "cancel_url": cancel_url,
                "currency": currency,
                "customer_email": customer_email,
            }
        )

        if not self.should_succeed:
            return HostedSession(success=False, failure_reason=self.failure_reason)

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        self.sessions[session_id] = {"paid": False, "payment_reference": None}
        return HostedSession(
            success=True,
            session_id=session_id,
            hosted_url=f"https://checkout.fake.test/pay/{session_id}",
        )

    def retrieve_session(self, session_id: str) -> SessionStatus:
        self.calls.append({"method": "retrieve_session", "session_id": session_id})

        if not self.retrieve_should_succeed:
            return SessionStatus(success=False, failure_reason=self.failure_reason)

        session = self.sessions.get(session_id)
        if session is None:
            return SessionStatus(success=False, failure_reason=f"No such checkout session: {session_id}")
        return SessionStatus(
            success=True,
            paid=session["paid"],
            payment_reference=session["payment_reference"],
        )

    def create_refund(self, payment_reference: str, idempotency_key: str) -> RefundResult:
        self.calls.append(
            {
                "method": "create_refund",
                "payment_reference": payment_reference,
                "idempotency_key": idempotency_key,
            }
        )

        # Same key, same outcome, as providers replay idempotent requests
        if idempotency_key in self.refunds and self.refunds[idempotency_key].success:
            return self.refunds[idempotency_key]

        if not self.refund_should_succeed:
            result = RefundResult(success=False, failure_reason=self.failure_reason)
        else:
            result = RefundResult(success=True, refund_id=f"fake_re_{uuid4().hex[:12]}")
        self.refunds[idempotency_key] = result
        return result
