"""
Records exchanged with the Reevit API.

Response records are built with ``from_response`` and keep the untouched body
in ``raw``. Request records serialize with ``to_payload``, which leaves out
optional fields that were not set.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Generic, List, Literal, Mapping, Optional, Tuple, TypeVar

__all__ = [
    "CheckoutConfig",
    "Connection",
    "ConnectionRequest",
    "FraudPolicy",
    "FraudPolicyInput",
    "Payment",
    "PaymentDetail",
    "PaymentError",
    "PaymentIntent",
    "PaymentIntentRequest",
    "PaymentMethod",
    "PaymentRouteAttempt",
    "PaymentSource",
    "PaymentSummary",
    "Refund",
    "Result",
    "RoutingHints",
    "Subscription",
    "SubscriptionInterval",
    "SubscriptionRequest",
]

PaymentMethod = Literal["card", "mobile_money", "bank_transfer"]
PaymentSource = Literal["payment_link", "api", "subscription"]
SubscriptionInterval = Literal["monthly", "yearly"]

T = TypeVar("T")


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


class _RequestPayload:
    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for item in fields(self):  # type: ignore[arg-type]
            value = getattr(self, item.name)
            if value is None:
                continue
            if hasattr(value, "to_payload"):
                value = value.to_payload()
            elif isinstance(value, tuple):
                value = list(value)
            elif isinstance(value, Mapping):
                value = dict(value)
            payload[item.name] = value
        return payload


@dataclass(frozen=True)
class RoutingHints(_RequestPayload):
    country_preference: Tuple[str, ...] = ()
    method_bias: Mapping[str, str] = field(default_factory=dict)
    fallback_only: bool = False

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "RoutingHints":
        return cls(
            country_preference=tuple(payload.get("country_preference") or ()),
            method_bias=dict(payload.get("method_bias") or {}),
            fallback_only=bool(payload.get("fallback_only")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "country_preference": list(self.country_preference),
            "method_bias": dict(self.method_bias),
            "fallback_only": self.fallback_only,
        }


def _routing_hints(payload: Mapping[str, Any]) -> Optional[RoutingHints]:
    hints = payload.get("routing_hints")
    if hints is None:
        return None
    return RoutingHints.from_response(hints)


@dataclass(frozen=True)
class FraudPolicyInput(_RequestPayload):
    """Per-intent policy overrides. Unset fields fall back to the org policy."""

    prefer: Optional[Tuple[str, ...]] = None
    max_amount: Optional[int] = None
    blocked_bins: Optional[Tuple[str, ...]] = None
    allowed_bins: Optional[Tuple[str, ...]] = None
    velocity_max_per_minute: Optional[int] = None


@dataclass(frozen=True)
class FraudPolicy:
    prefer: Tuple[str, ...]
    max_amount: int
    blocked_bins: Tuple[str, ...]
    allowed_bins: Tuple[str, ...]
    velocity_max_per_minute: int
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "FraudPolicy":
        return cls(
            prefer=tuple(payload.get("prefer") or ()),
            max_amount=payload.get("max_amount", 0),
            blocked_bins=tuple(payload.get("blocked_bins") or ()),
            allowed_bins=tuple(payload.get("allowed_bins") or ()),
            velocity_max_per_minute=payload.get("velocity_max_per_minute", 0),
            raw=payload,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "prefer": list(self.prefer),
            "max_amount": self.max_amount,
            "blocked_bins": list(self.blocked_bins),
            "allowed_bins": list(self.allowed_bins),
            "velocity_max_per_minute": self.velocity_max_per_minute,
        }


@dataclass(frozen=True)
class PaymentIntentRequest(_RequestPayload):
    amount: int
    currency: str
    method: str
    country: str
    reference: Optional[str] = None
    customer_id: Optional[str] = None
    policy: Optional[FraudPolicyInput] = None
    metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class CheckoutConfig:
    """Amount and currency of a checkout, as collected by the front end."""

    amount: int
    currency: str
    metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class PaymentRouteAttempt:
    connection_id: str
    provider: str
    status: str
    error: str
    labels: Tuple[str, ...]
    routing_hints: Optional[RoutingHints] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentRouteAttempt":
        return cls(
            connection_id=payload.get("connection_id", ""),
            provider=payload.get("provider", ""),
            status=payload.get("status", ""),
            error=payload.get("error", ""),
            labels=tuple(payload.get("labels") or ()),
            routing_hints=_routing_hints(payload),
        )


@dataclass(frozen=True)
class PaymentSummary:
    id: str
    connection_id: str
    provider: str
    method: str
    status: str
    amount: int
    currency: str
    fee_amount: int
    fee_currency: str
    net_amount: int
    customer_id: str
    metadata: Mapping[str, Any]
    created_at: str
    reference: Optional[str] = None
    source: Optional[PaymentSource] = None
    source_id: Optional[str] = None
    source_description: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentSummary":
        return cls(
            id=payload["id"],
            connection_id=payload.get("connection_id", ""),
            provider=payload.get("provider", ""),
            method=payload.get("method", ""),
            status=payload.get("status", ""),
            amount=payload.get("amount", 0),
            currency=payload.get("currency", ""),
            fee_amount=payload.get("fee_amount", 0),
            fee_currency=payload.get("fee_currency", ""),
            net_amount=payload.get("net_amount", 0),
            customer_id=payload.get("customer_id", ""),
            metadata=dict(payload.get("metadata") or {}),
            created_at=payload.get("created_at", ""),
            reference=payload.get("reference"),
            source=payload.get("source"),
            source_id=payload.get("source_id"),
            source_description=payload.get("source_description"),
            raw=payload,
        )


@dataclass(frozen=True)
class Payment:
    id: str
    connection_id: str
    provider: str
    provider_ref_id: str
    method: str
    status: str
    amount: int
    currency: str
    fee_amount: int
    fee_currency: str
    net_amount: int
    customer_id: str
    metadata: Mapping[str, Any]
    route: Tuple[PaymentRouteAttempt, ...]
    created_at: str
    updated_at: str
    reference: Optional[str] = None
    source: Optional[PaymentSource] = None
    source_id: Optional[str] = None
    source_description: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Payment":
        return cls(
            id=payload["id"],
            connection_id=payload.get("connection_id", ""),
            provider=payload.get("provider", ""),
            provider_ref_id=payload.get("provider_ref_id", ""),
            method=payload.get("method", ""),
            status=payload.get("status", ""),
            amount=payload.get("amount", 0),
            currency=payload.get("currency", ""),
            fee_amount=payload.get("fee_amount", 0),
            fee_currency=payload.get("fee_currency", ""),
            net_amount=payload.get("net_amount", 0),
            customer_id=payload.get("customer_id", ""),
            metadata=dict(payload.get("metadata") or {}),
            route=tuple(
                PaymentRouteAttempt.from_response(attempt)
                for attempt in payload.get("route") or ()
            ),
            created_at=payload.get("created_at", ""),
            updated_at=payload.get("updated_at", ""),
            reference=payload.get("reference"),
            source=payload.get("source"),
            source_id=payload.get("source_id"),
            source_description=payload.get("source_description"),
            raw=payload,
        )


@dataclass(frozen=True)
class PaymentIntent:
    """Response to a checkout ``create_payment_intent`` call."""

    id: str
    connection_id: str
    provider: str
    status: str
    client_secret: str
    amount: int
    currency: str
    fee_amount: int
    fee_currency: str
    net_amount: int
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentIntent":
        return cls(
            id=payload["id"],
            connection_id=payload.get("connection_id", ""),
            provider=payload.get("provider", ""),
            status=payload.get("status", ""),
            client_secret=payload.get("client_secret", ""),
            amount=payload.get("amount", 0),
            currency=payload.get("currency", ""),
            fee_amount=payload.get("fee_amount", 0),
            fee_currency=payload.get("fee_currency", ""),
            net_amount=payload.get("net_amount", 0),
            raw=payload,
        )


@dataclass(frozen=True)
class PaymentDetail:
    id: str
    connection_id: str
    provider: str
    method: str
    status: str
    amount: int
    currency: str
    fee_amount: int
    fee_currency: str
    net_amount: int
    client_secret: str
    created_at: str
    updated_at: str
    customer_id: Optional[str] = None
    provider_ref_id: Optional[str] = None
    metadata: Optional[Mapping[str, Any]] = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentDetail":
        return cls(
            id=payload["id"],
            connection_id=payload.get("connection_id", ""),
            provider=payload.get("provider", ""),
            method=payload.get("method", ""),
            status=payload.get("status", ""),
            amount=payload.get("amount", 0),
            currency=payload.get("currency", ""),
            fee_amount=payload.get("fee_amount", 0),
            fee_currency=payload.get("fee_currency", ""),
            net_amount=payload.get("net_amount", 0),
            client_secret=payload.get("client_secret", ""),
            created_at=payload.get("created_at", ""),
            updated_at=payload.get("updated_at", ""),
            customer_id=payload.get("customer_id"),
            provider_ref_id=payload.get("provider_ref_id"),
            metadata=payload.get("metadata"),
            raw=payload,
        )


@dataclass(frozen=True)
class Refund:
    id: str
    payment_id: str
    amount: int
    status: str
    reason: str
    created_at: str
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Refund":
        return cls(
            id=payload["id"],
            payment_id=payload.get("payment_id", ""),
            amount=payload.get("amount", 0),
            status=payload.get("status", ""),
            reason=payload.get("reason", ""),
            created_at=payload.get("created_at", ""),
            raw=payload,
        )


@dataclass(frozen=True)
class ConnectionRequest(_RequestPayload):
    provider: str
    mode: str
    credentials: Mapping[str, Any]
    capabilities: Optional[Mapping[str, Any]] = None
    routing_hints: Optional[RoutingHints] = None
    labels: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class Connection:
    id: str
    provider: str
    mode: str
    status: str
    capabilities: Mapping[str, Any]
    routing_hints: RoutingHints
    labels: Tuple[str, ...]
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Connection":
        return cls(
            id=payload["id"],
            provider=payload.get("provider", ""),
            mode=payload.get("mode", ""),
            status=payload.get("status", ""),
            capabilities=dict(payload.get("capabilities") or {}),
            routing_hints=_routing_hints(payload) or RoutingHints(),
            labels=tuple(payload.get("labels") or ()),
            raw=payload,
        )


@dataclass(frozen=True)
class SubscriptionRequest(_RequestPayload):
    customer_id: str
    plan_id: str
    amount: int
    currency: str
    method: str
    interval: SubscriptionInterval
    metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Subscription:
    id: str
    org_id: str
    customer_id: str
    plan_id: str
    amount: int
    currency: str
    method: str
    interval: str
    status: str
    next_renewal_at: str
    metadata: Mapping[str, Any]
    created_at: str
    updated_at: str
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Subscription":
        return cls(
            id=payload["id"],
            org_id=payload.get("org_id", ""),
            customer_id=payload.get("customer_id", ""),
            plan_id=payload.get("plan_id", ""),
            amount=payload.get("amount", 0),
            currency=payload.get("currency", ""),
            method=payload.get("method", ""),
            interval=payload.get("interval", ""),
            status=payload.get("status", ""),
            next_renewal_at=payload.get("next_renewal_at", ""),
            metadata=dict(payload.get("metadata") or {}),
            created_at=payload.get("created_at", ""),
            updated_at=payload.get("updated_at", ""),
            raw=payload,
        )


@dataclass(frozen=True)
class PaymentError:
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {"code": self.code, "message": self.message, "details": self.details}
        )


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a checkout client call: either ``data`` or ``error`` is set."""

    data: Optional[T] = None
    error: Optional[PaymentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_list(payload: Any, convert: Any) -> List[Any]:
    return [convert(item) for item in payload or ()]


def parse_optional(payload: Any, convert: Any) -> Any:
    """Convert ``payload`` unless the response had no body."""
    if payload is None:
        return None
    return convert(payload)
