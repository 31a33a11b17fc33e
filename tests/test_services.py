import pytest
import requests

from conftest import ORG_ID, SECRET_KEY, last_call, make_response
from reevit import (
    ClientConfig,
    ConfigError,
    ConnectionRequest,
    FraudPolicy,
    FraudPolicyInput,
    PaymentIntentRequest,
    ReevitClient,
    RoutingHints,
    SubscriptionRequest,
)

BASE = "https://sandbox-api.reevit.io"

PAYMENT = {
    "id": "pay_1",
    "connection_id": "conn_1",
    "provider": "paystack",
    "provider_ref_id": "ref_1",
    "method": "mobile_money",
    "status": "pending",
    "amount": 10000,
    "currency": "GHS",
    "fee_amount": 150,
    "fee_currency": "GHS",
    "net_amount": 9850,
    "customer_id": "cus_1",
    "metadata": {},
    "route": [
        {
            "connection_id": "conn_1",
            "provider": "paystack",
            "status": "succeeded",
            "error": "",
            "labels": ["primary"],
        }
    ],
    "created_at": "2024-01-01T00:00:00Z",
    "updated_at": "2024-01-01T00:00:00Z",
}

CONNECTION = {
    "id": "conn_1",
    "provider": "hubtel",
    "mode": "live",
    "status": "active",
    "capabilities": {"mobile_money": True},
    "routing_hints": {
        "country_preference": ["GH", "NG"],
        "method_bias": {"mobile_money": "high"},
        "fallback_only": False,
    },
    "labels": ["momo"],
}

SUBSCRIPTION = {
    "id": "sub_1",
    "org_id": ORG_ID,
    "customer_id": "cus_1",
    "plan_id": "plan_pro",
    "amount": 5000,
    "currency": "GHS",
    "method": "card",
    "interval": "monthly",
    "status": "active",
    "next_renewal_at": "2024-02-01T00:00:00Z",
    "metadata": {},
    "created_at": "2024-01-01T00:00:00Z",
    "updated_at": "2024-01-01T00:00:00Z",
}

POLICY = {
    "prefer": ["paystack", "hubtel"],
    "max_amount": 500000,
    "blocked_bins": ["411111"],
    "allowed_bins": [],
    "velocity_max_per_minute": 5,
}


class TestClientSetup:
    def test_headers(self, client, session):
        session.request.return_value = make_response(200, [])

        client.connections.list()

        _, _, kwargs = last_call(session)
        assert kwargs["headers"] == {
            "Content-Type": "application/json",
            "User-Agent": "reevit-python/0.1.0",
            "Authorization": f"Bearer {SECRET_KEY}",
            "X-Reevit-Key": SECRET_KEY,
            "X-Org-Id": ORG_ID,
        }
        assert kwargs["timeout"] == 10.0

    def test_base_url_detection(self, session):
        assert ReevitClient("sk_test_1", "org", session=session).base_url == BASE
        assert (
            ReevitClient("sk_live_1", "org", session=session).base_url
            == "https://api.reevit.io"
        )
        assert (
            ReevitClient("sk_test_1", "org", "https://proxy.local", session=session).base_url
            == "https://proxy.local"
        )

    def test_publishable_config_is_rejected(self, session):
        config = ClientConfig(credential="pk_test_1", key_type="publishable")
        with pytest.raises(ConfigError):
            ReevitClient(config=config, session=session)

    def test_timeout_with_config_is_rejected(self, session):
        config = ClientConfig(credential=SECRET_KEY, organization_id=ORG_ID)
        with pytest.raises(ValueError):
            ReevitClient(config=config, timeout=5, session=session)

    def test_context_manager_closes_session(self, session):
        with ReevitClient(SECRET_KEY, ORG_ID, session=session):
            pass
        session.close.assert_called_once_with()


class TestPayments:
    def test_create_intent(self, client, session):
        session.request.return_value = make_response(201, PAYMENT)
        request = PaymentIntentRequest(
            amount=10000,
            currency="GHS",
            method="mobile_money",
            country="GH",
            customer_id="cus_1",
            policy=FraudPolicyInput(prefer=("paystack",), max_amount=20000),
        )

        payment = client.payments.create_intent(request)

        method, url, kwargs = last_call(session)
        assert (method, url) == ("POST", f"{BASE}/v1/payments/intents")
        assert kwargs["json"] == {
            "amount": 10000,
            "currency": "GHS",
            "method": "mobile_money",
            "country": "GH",
            "customer_id": "cus_1",
            "policy": {"prefer": ["paystack"], "max_amount": 20000},
        }
        assert payment.id == "pay_1"
        assert payment.route[0].labels == ("primary",)

    def test_list_passes_pagination(self, client, session):
        rows = [dict(PAYMENT, id="pay_1"), dict(PAYMENT, id="pay_2")]
        session.request.return_value = make_response(200, rows)

        payments = client.payments.list(limit=10, offset=5)

        method, url, kwargs = last_call(session)
        assert (method, url) == ("GET", f"{BASE}/v1/payments")
        assert kwargs["params"] == {"limit": 10, "offset": 5}
        assert [payment.id for payment in payments] == ["pay_1", "pay_2"]
        assert [payment.raw for payment in payments] == rows

    def test_list_defaults(self, client, session):
        session.request.return_value = make_response(200, [])

        assert client.payments.list() == []
        assert last_call(session)[2]["params"] == {"limit": 50, "offset": 0}

    def test_get(self, client, session):
        session.request.return_value = make_response(200, PAYMENT)

        payment = client.payments.get("pay_1")

        assert last_call(session)[:2] == ("GET", f"{BASE}/v1/payments/pay_1")
        assert payment.net_amount == payment.amount - payment.fee_amount

    def test_partial_refund(self, client, session):
        session.request.return_value = make_response(
            200,
            {
                "id": "ref_1",
                "payment_id": "pay_1",
                "amount": 500,
                "status": "pending",
                "reason": "duplicate",
                "created_at": "2024-01-01T00:00:00Z",
            },
        )

        refund = client.payments.refund("pay_1", amount=500, reason="duplicate")

        method, url, kwargs = last_call(session)
        assert (method, url) == ("POST", f"{BASE}/v1/payments/pay_1/refund")
        assert kwargs["json"] == {"amount": 500, "reason": "duplicate"}
        assert refund.amount == 500

    def test_full_refund_sends_empty_body(self, client, session):
        session.request.return_value = make_response(200, {"id": "ref_2"})

        client.payments.refund("pay_1")

        assert last_call(session)[2]["json"] == {}

    @pytest.mark.parametrize("action", ["confirm", "cancel"])
    def test_confirm_and_cancel(self, client, session, action):
        session.request.return_value = make_response(200, dict(PAYMENT, status=action))

        payment = getattr(client.payments, action)("pay_1")

        method, url, kwargs = last_call(session)
        assert (method, url) == ("POST", f"{BASE}/v1/payments/pay_1/{action}")
        assert kwargs["json"] is None
        assert payment.status == action

    def test_failure_propagates(self, client, session):
        session.request.return_value = make_response(404, {"code": "not_found"})

        with pytest.raises(requests.HTTPError):
            client.payments.get("missing")


class TestConnections:
    REQUEST = ConnectionRequest(
        provider="hubtel",
        mode="live",
        credentials={"client_id": "id", "client_secret": "secret"},
        routing_hints=RoutingHints(
            country_preference=("GH", "NG"),
            method_bias={"mobile_money": "high"},
        ),
        labels=("momo",),
    )

    def test_create(self, client, session):
        session.request.return_value = make_response(201, CONNECTION)

        connection = client.connections.create(self.REQUEST)

        method, url, kwargs = last_call(session)
        assert (method, url) == ("POST", f"{BASE}/v1/connections")
        assert kwargs["json"] == {
            "provider": "hubtel",
            "mode": "live",
            "credentials": {"client_id": "id", "client_secret": "secret"},
            "routing_hints": {
                "country_preference": ["GH", "NG"],
                "method_bias": {"mobile_money": "high"},
                "fallback_only": False,
            },
            "labels": ["momo"],
        }
        assert connection.routing_hints.country_preference == ("GH", "NG")

    def test_list(self, client, session):
        session.request.return_value = make_response(200, [CONNECTION])

        connections = client.connections.list()

        assert last_call(session)[:2] == ("GET", f"{BASE}/v1/connections")
        assert connections[0].labels == ("momo",)

    @pytest.mark.parametrize("success", [True, False])
    def test_test_credentials(self, client, session, success):
        session.request.return_value = make_response(200, {"success": success})

        assert client.connections.test(self.REQUEST) is success
        assert last_call(session)[:2] == ("POST", f"{BASE}/v1/connections/test")


class TestSubscriptions:
    def test_create(self, client, session):
        session.request.return_value = make_response(201, SUBSCRIPTION)
        request = SubscriptionRequest(
            customer_id="cus_1",
            plan_id="plan_pro",
            amount=5000,
            currency="GHS",
            method="card",
            interval="monthly",
        )

        subscription = client.subscriptions.create(request)

        method, url, kwargs = last_call(session)
        assert (method, url) == ("POST", f"{BASE}/v1/subscriptions")
        assert kwargs["json"] == {
            "customer_id": "cus_1",
            "plan_id": "plan_pro",
            "amount": 5000,
            "currency": "GHS",
            "method": "card",
            "interval": "monthly",
        }
        assert subscription.next_renewal_at == "2024-02-01T00:00:00Z"

    def test_list(self, client, session):
        session.request.return_value = make_response(200, [SUBSCRIPTION])

        subscriptions = client.subscriptions.list()

        assert last_call(session)[:2] == ("GET", f"{BASE}/v1/subscriptions")
        assert subscriptions[0].interval == "monthly"


class TestFraud:
    def test_get(self, client, session):
        session.request.return_value = make_response(200, POLICY)

        policy = client.fraud.get()

        assert last_call(session)[:2] == ("GET", f"{BASE}/v1/policies/fraud")
        assert policy.prefer == ("paystack", "hubtel")

    def test_update_round_trip(self, client, session):
        policy = FraudPolicy.from_response(POLICY)
        session.request.side_effect = lambda *args, **kwargs: make_response(
            200, kwargs["json"]
        )

        updated = client.fraud.update(policy)

        method, url, kwargs = last_call(session)
        assert (method, url) == ("POST", f"{BASE}/v1/policies/fraud")
        assert kwargs["json"] == POLICY
        assert updated == policy


class TestEmptyBodies:
    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.payments.cancel("pay_1"),
            lambda c: c.payments.confirm("pay_1"),
            lambda c: c.payments.refund("pay_1"),
            lambda c: c.fraud.get(),
        ],
    )
    def test_no_content_returns_none(self, client, session, call):
        session.request.return_value = make_response(204)

        assert call(client) is None

    def test_no_content_lists_are_empty(self, client, session):
        session.request.return_value = make_response(204)

        assert client.subscriptions.list() == []
        assert client.connections.test(TestConnections.REQUEST) is False
