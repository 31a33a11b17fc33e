"""
Core primitives of the Reevit API client.
"""

from .client import (
    CLIENT_NAME,
    CLIENT_VERSION,
    ReevitAPIClient,
    ReevitClient,
    checkout_headers,
    server_headers,
)
from .config import ConfigError, ClientConfig, load_client_config
from .environment import (
    API_BASE_URL_PRODUCTION,
    API_BASE_URL_SANDBOX,
    ClientEnvironment,
    build_environment,
    default_base_url,
    detect_environment,
    load_env_file,
)
from .services import (
    ConnectionsService,
    FraudService,
    PaymentsService,
    SubscriptionsService,
)
from .transport import Transport
from .types import (
    CheckoutConfig,
    Connection,
    ConnectionRequest,
    FraudPolicy,
    FraudPolicyInput,
    Payment,
    PaymentDetail,
    PaymentError,
    PaymentIntent,
    PaymentIntentRequest,
    PaymentRouteAttempt,
    PaymentSummary,
    Refund,
    Result,
    RoutingHints,
    Subscription,
    SubscriptionRequest,
)

__all__ = [
    "API_BASE_URL_PRODUCTION",
    "API_BASE_URL_SANDBOX",
    "CLIENT_NAME",
    "CLIENT_VERSION",
    "CheckoutConfig",
    "ClientConfig",
    "ClientEnvironment",
    "ConfigError",
    "Connection",
    "ConnectionRequest",
    "ConnectionsService",
    "FraudPolicy",
    "FraudPolicyInput",
    "FraudService",
    "Payment",
    "PaymentDetail",
    "PaymentError",
    "PaymentIntent",
    "PaymentIntentRequest",
    "PaymentRouteAttempt",
    "PaymentSummary",
    "PaymentsService",
    "ReevitAPIClient",
    "ReevitClient",
    "Refund",
    "Result",
    "RoutingHints",
    "Subscription",
    "SubscriptionRequest",
    "SubscriptionsService",
    "Transport",
    "build_environment",
    "checkout_headers",
    "default_base_url",
    "detect_environment",
    "load_client_config",
    "load_env_file",
    "server_headers",
]
