"""
Public facade for the Reevit API client package.

The most useful pieces are re-exported here so integrators can
``from reevit import ...`` without navigating the package.
"""

from .api import create_checkout_client, create_client
from .core import (
    API_BASE_URL_PRODUCTION,
    API_BASE_URL_SANDBOX,
    CLIENT_VERSION,
    CheckoutConfig,
    ClientConfig,
    ConfigError,
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
    ReevitAPIClient,
    ReevitClient,
    Refund,
    Result,
    RoutingHints,
    Subscription,
    SubscriptionRequest,
    default_base_url,
    detect_environment,
    load_client_config,
    load_env_file,
)

__version__ = CLIENT_VERSION

__all__ = (
    "API_BASE_URL_PRODUCTION",
    "API_BASE_URL_SANDBOX",
    "CheckoutConfig",
    "ClientConfig",
    "ConfigError",
    "Connection",
    "ConnectionRequest",
    "FraudPolicy",
    "FraudPolicyInput",
    "Payment",
    "PaymentDetail",
    "PaymentError",
    "PaymentIntent",
    "PaymentIntentRequest",
    "PaymentRouteAttempt",
    "PaymentSummary",
    "ReevitAPIClient",
    "ReevitClient",
    "Refund",
    "Result",
    "RoutingHints",
    "Subscription",
    "SubscriptionRequest",
    "create_checkout_client",
    "create_client",
    "default_base_url",
    "detect_environment",
    "load_client_config",
    "load_env_file",
)
