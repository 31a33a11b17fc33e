"""
HTTP plumbing shared by the Reevit clients.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from .types import PaymentError, Result

__all__ = [
    "Transport",
    "classify_exception",
    "error_from_response",
]

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"
TIMEOUT_MESSAGE = "The request timed out. Please try again."
NETWORK_MESSAGE = "Unable to connect to Reevit. Please check your internet connection."
UNKNOWN_MESSAGE = "An unexpected error occurred. Please try again."


def _json_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    return response.json()


def error_from_response(response: requests.Response) -> PaymentError:
    """
    Build a :class:`PaymentError` from a non-2xx response.

    Missing or unreadable error bodies fall back to ``api_error`` and a generic
    message rather than being reported as a separate failure.
    """
    try:
        body = _json_body(response)
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    details: Dict[str, Any] = {"httpStatus": response.status_code}
    extra = body.get("details")
    if isinstance(extra, dict):
        details.update(extra)

    return PaymentError(
        code=body.get("code") or "api_error",
        message=body.get("message") or DEFAULT_ERROR_MESSAGE,
        details=details,
    )


def classify_exception(exc: Exception) -> PaymentError:
    # ConnectTimeout is both a Timeout and a ConnectionError; timeouts win.
    if isinstance(exc, requests.Timeout):
        return PaymentError(code="request_timeout", message=TIMEOUT_MESSAGE)
    if isinstance(exc, requests.ConnectionError):
        return PaymentError(code="network_error", message=NETWORK_MESSAGE)
    return PaymentError(code="unknown_error", message=UNKNOWN_MESSAGE)


class Transport:
    """
    Issues authenticated JSON requests against a single base URL.

    ``send`` lets ``requests`` exceptions through to the caller, ``request``
    never raises and reports failures as a :class:`Result` instead.
    """

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str],
        timeout: float,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers)
        self.timeout = timeout
        self.session = session or requests.Session()

    def _perform(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        logging.debug("%s %s", method, url)
        return self.session.request(
            method,
            url,
            params=params,
            json=body,
            headers=self.headers,
            timeout=self.timeout,
        )

    def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> Any:
        response = self._perform(method, path, params=params, body=body)
        response.raise_for_status()
        return _json_body(response)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
        convert: Optional[Callable[[Any], Any]] = None,
    ) -> Result[Any]:
        try:
            response = self._perform(method, path, params=params, body=body)
            if not 200 <= response.status_code < 300:
                error = error_from_response(response)
                logging.warning(
                    "Reevit responded to %s %s with %s: %s",
                    method,
                    path,
                    response.status_code,
                    error.code,
                )
                return Result(error=error)
            data = _json_body(response)
            if convert is not None and data is not None:
                data = convert(data)
            return Result(data=data)
        except Exception as exc:  # noqa: BLE001
            error = classify_exception(exc)
            logging.warning("%s %s failed (%s): %s", method, path, error.code, exc)
            return Result(error=error)

    def close(self) -> None:
        self.session.close()
