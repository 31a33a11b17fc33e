"""
Resource facades used by :class:`reevit.core.client.ReevitClient`.

Each method maps to exactly one API endpoint. Failures are not caught here:
``requests`` exceptions reach the caller unchanged. A 2xx response without a
body yields ``None``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .transport import Transport
from .types import (
    Connection,
    ConnectionRequest,
    FraudPolicy,
    Payment,
    PaymentIntentRequest,
    PaymentSummary,
    Refund,
    Subscription,
    SubscriptionRequest,
    parse_list,
    parse_optional,
)

__all__ = [
    "ConnectionsService",
    "FraudService",
    "PaymentsService",
    "SubscriptionsService",
]


class _Service:
    def __init__(self, transport: Transport) -> None:
        self.transport = transport


class PaymentsService(_Service):
    def create_intent(self, request: PaymentIntentRequest) -> Optional[Payment]:
        payload = self.transport.send(
            "POST", "/v1/payments/intents", body=request.to_payload()
        )
        payment = parse_optional(payload, Payment.from_response)
        if payment is not None:
            logging.info("Created payment intent %s via %s", payment.id, payment.provider)
        return payment

    def list(self, limit: int = 50, offset: int = 0) -> List[PaymentSummary]:
        payload = self.transport.send(
            "GET", "/v1/payments", params={"limit": limit, "offset": offset}
        )
        return parse_list(payload, PaymentSummary.from_response)

    def get(self, payment_id: str) -> Optional[Payment]:
        return parse_optional(
            self.transport.send("GET", f"/v1/payments/{payment_id}"),
            Payment.from_response,
        )

    def refund(
        self,
        payment_id: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> Optional[Refund]:
        """
        Refund ``payment_id``. Omitting ``amount`` refunds the full payment.
        """
        body: Dict[str, Any] = {}
        if amount is not None:
            body["amount"] = amount
        if reason is not None:
            body["reason"] = reason
        payload = self.transport.send(
            "POST", f"/v1/payments/{payment_id}/refund", body=body
        )
        logging.info("Refund requested for payment %s", payment_id)
        return parse_optional(payload, Refund.from_response)

    def confirm(self, payment_id: str) -> Optional[Payment]:
        return parse_optional(
            self.transport.send("POST", f"/v1/payments/{payment_id}/confirm"),
            Payment.from_response,
        )

    def cancel(self, payment_id: str) -> Optional[Payment]:
        return parse_optional(
            self.transport.send("POST", f"/v1/payments/{payment_id}/cancel"),
            Payment.from_response,
        )


class ConnectionsService(_Service):
    def create(self, request: ConnectionRequest) -> Optional[Connection]:
        payload = self.transport.send(
            "POST", "/v1/connections", body=request.to_payload()
        )
        return parse_optional(payload, Connection.from_response)

    def list(self) -> List[Connection]:
        return parse_list(
            self.transport.send("GET", "/v1/connections"), Connection.from_response
        )

    def test(self, request: ConnectionRequest) -> bool:
        """Ask the provider to validate ``request.credentials`` without saving them."""
        payload = self.transport.send(
            "POST", "/v1/connections/test", body=request.to_payload()
        )
        return bool((payload or {}).get("success"))


class SubscriptionsService(_Service):
    def create(self, request: SubscriptionRequest) -> Optional[Subscription]:
        payload = self.transport.send(
            "POST", "/v1/subscriptions", body=request.to_payload()
        )
        return parse_optional(payload, Subscription.from_response)

    def list(self) -> List[Subscription]:
        return parse_list(
            self.transport.send("GET", "/v1/subscriptions"),
            Subscription.from_response,
        )


class FraudService(_Service):
    def get(self) -> Optional[FraudPolicy]:
        return parse_optional(
            self.transport.send("GET", "/v1/policies/fraud"), FraudPolicy.from_response
        )

    def update(self, policy: FraudPolicy) -> Optional[FraudPolicy]:
        """Replace the organization's fraud policy with ``policy``."""
        payload = self.transport.send(
            "POST", "/v1/policies/fraud", body=policy.to_payload()
        )
        return parse_optional(payload, FraudPolicy.from_response)
