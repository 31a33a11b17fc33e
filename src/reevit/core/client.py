"""
Client entry points for the Reevit API.

:class:`ReevitClient` is the server-side client authenticated with a secret
key; its calls return parsed data and let transport failures propagate.
:class:`ReevitAPIClient` is the checkout client authenticated with a
publishable key; every call returns a :class:`~reevit.core.types.Result` and
never raises.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from .config import ClientConfig, ConfigError
from .environment import KEY_TYPE_PUBLISHABLE, KEY_TYPE_SECRET
from .services import (
    ConnectionsService,
    FraudService,
    PaymentsService,
    SubscriptionsService,
)
from .transport import Transport
from .types import (
    CheckoutConfig,
    PaymentDetail,
    PaymentIntent,
    PaymentIntentRequest,
    Result,
)

__all__ = [
    "CLIENT_NAME",
    "CLIENT_VERSION",
    "ReevitAPIClient",
    "ReevitClient",
    "checkout_headers",
    "server_headers",
]

CLIENT_NAME = "reevit-python"
CLIENT_VERSION = "0.1.0"

_PAYMENT_METHODS = ("card", "mobile_money", "bank_transfer")


def server_headers(api_key: str, org_id: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "User-Agent": f"{CLIENT_NAME}/{CLIENT_VERSION}",
        "Authorization": f"Bearer {api_key}",
        "X-Reevit-Key": api_key,
        "X-Org-Id": org_id,
    }


def checkout_headers(public_key: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {public_key}",
        "X-Reevit-Client": CLIENT_NAME,
        "X-Reevit-Client-Version": CLIENT_VERSION,
    }


def _check_config(config: ClientConfig, key_type: str, extras: Any) -> None:
    if any(item is not None for item in extras):
        raise ValueError(
            "Provide either a pre-built ClientConfig or individual parameters, not both."
        )
    if config.key_type != key_type:
        raise ConfigError(
            f"This client needs a {key_type} key configuration, got {config.key_type}"
        )


class _BaseClient:
    def __init__(self, config: ClientConfig, transport: Transport) -> None:
        self.config = config
        self.transport = transport

    @property
    def base_url(self) -> str:
        return self.transport.base_url

    def close(self) -> None:
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class ReevitClient(_BaseClient):
    """
    Full-resource client for server-side integrations.

    ``requests.HTTPError``, ``requests.Timeout`` and ``requests.ConnectionError``
    are raised to the caller as-is.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        org_id: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if config is None:
            config = ClientConfig(
                credential=api_key or "",
                organization_id=org_id,
                base_url=base_url,
                timeout=timeout,
                key_type=KEY_TYPE_SECRET,
            )
        else:
            _check_config(config, KEY_TYPE_SECRET, (api_key, org_id, base_url, timeout))
        transport = Transport(
            config.resolved_base_url,
            server_headers(config.credential, config.organization_id or ""),
            config.timeout,
            session=session,
        )
        super().__init__(config, transport)

        self.payments = PaymentsService(transport)
        self.connections = ConnectionsService(transport)
        self.subscriptions = SubscriptionsService(transport)
        self.fraud = FraudService(transport)
        logging.debug("Reevit client ready for %s", self.base_url)


class ReevitAPIClient(_BaseClient):
    """
    Checkout client for publishable keys.

    Methods return ``Result(data=...)`` on success and ``Result(error=...)``
    with one of ``api_error``-style codes from the API, ``request_timeout``,
    ``network_error`` or ``unknown_error`` otherwise.
    """

    def __init__(
        self,
        public_key: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if config is None:
            config = ClientConfig(
                credential=public_key or "",
                base_url=base_url,
                timeout=timeout,
                key_type=KEY_TYPE_PUBLISHABLE,
            )
        else:
            _check_config(config, KEY_TYPE_PUBLISHABLE, (public_key, base_url, timeout))
        transport = Transport(
            config.resolved_base_url,
            checkout_headers(config.credential),
            config.timeout,
            session=session,
        )
        super().__init__(config, transport)

    def create_payment_intent(
        self,
        checkout: CheckoutConfig,
        method: str,
        country: str = "GH",
    ) -> Result[PaymentIntent]:
        metadata: Optional[Mapping[str, Any]] = checkout.metadata
        request = PaymentIntentRequest(
            amount=checkout.amount,
            currency=checkout.currency,
            method=self._map_payment_method(method),
            country=country,
            customer_id=(metadata or {}).get("customerId"),
            metadata=metadata,
        )
        return self.transport.request(
            "POST",
            "/v1/payments/intents",
            body=request.to_payload(),
            convert=PaymentIntent.from_response,
        )

    def get_payment_intent(self, payment_id: str) -> Result[PaymentDetail]:
        return self.transport.request(
            "GET", f"/v1/payments/{payment_id}", convert=PaymentDetail.from_response
        )

    def confirm_payment(self, payment_id: str) -> Result[PaymentDetail]:
        return self.transport.request(
            "POST",
            f"/v1/payments/{payment_id}/confirm",
            convert=PaymentDetail.from_response,
        )

    def cancel_payment_intent(self, payment_id: str) -> Result[PaymentDetail]:
        return self.transport.request(
            "POST",
            f"/v1/payments/{payment_id}/cancel",
            convert=PaymentDetail.from_response,
        )

    @staticmethod
    def _map_payment_method(method: str) -> str:
        """Known methods map to themselves; others are passed through for the API to judge."""
        if method not in _PAYMENT_METHODS:
            logging.debug("Passing through unrecognised payment method %s", method)
        return method
