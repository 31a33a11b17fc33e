import json
from unittest.mock import MagicMock

import pytest
import requests
from requests import Response

from reevit import ReevitAPIClient, ReevitClient

SECRET_KEY = "sk_test_123"
PUBLIC_KEY = "pk_test_123"
ORG_ID = "org_42"


def make_response(status_code: int = 200, payload=None, *, content: bytes = None) -> Response:
    """Create a Response carrying ``payload`` serialized as JSON."""
    response = Response()
    response.status_code = status_code
    if content is None:
        content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    response._content = content
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    response.url = "https://sandbox-api.reevit.io/"
    response.reason = "Error" if status_code >= 400 else "OK"
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return ReevitClient(SECRET_KEY, ORG_ID, session=session)


@pytest.fixture
def checkout(session):
    return ReevitAPIClient(PUBLIC_KEY, session=session)


def last_call(session):
    """Return ``(method, url, kwargs)`` of the most recent session request."""
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs
