"""
Configuration objects and helpers for the Reevit clients.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import (
    KEY_TYPE_PUBLISHABLE,
    KEY_TYPE_SECRET,
    build_environment,
    default_base_url,
)

__all__ = [
    "ConfigError",
    "ClientConfig",
    "DEFAULT_CHECKOUT_TIMEOUT",
    "DEFAULT_SERVER_TIMEOUT",
    "load_client_config",
]

DEFAULT_SERVER_TIMEOUT = 10.0
DEFAULT_CHECKOUT_TIMEOUT = 30.0

_CREDENTIAL_ENV_KEY = {
    KEY_TYPE_SECRET: "REEVIT_API_KEY",
    KEY_TYPE_PUBLISHABLE: "REEVIT_PUBLIC_KEY",
}
_ORG_ID_ENV_KEY = "REEVIT_ORG_ID"
_BASE_URL_ENV_KEY = "REEVIT_BASE_URL"
_TIMEOUT_ENV_KEY = "REEVIT_TIMEOUT_SECONDS"

_DEFAULT_TIMEOUTS = {
    KEY_TYPE_SECRET: DEFAULT_SERVER_TIMEOUT,
    KEY_TYPE_PUBLISHABLE: DEFAULT_CHECKOUT_TIMEOUT,
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _parse_timeout(raw: Any) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Timeout must be a number of seconds, got '{raw}'") from exc
    if timeout <= 0:
        raise ConfigError("Timeout must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable settings shared by both clients.

    ``timeout`` is expressed in seconds, the unit ``requests`` expects, and
    defaults per ``key_type``: 10 s for secret keys, 30 s for publishable keys.
    ``base_url`` is only set when the caller overrides it; use
    :attr:`resolved_base_url` for the URL actually contacted.
    """

    credential: str
    organization_id: Optional[str] = None
    base_url: Optional[str] = None
    timeout: Optional[float] = None
    key_type: str = KEY_TYPE_SECRET

    def __post_init__(self) -> None:
        if not self.credential or not self.credential.strip():
            raise ConfigError("An API credential is required")
        if self.key_type not in _CREDENTIAL_ENV_KEY:
            raise ConfigError(f"Unknown key type '{self.key_type}'")
        if self.key_type == KEY_TYPE_SECRET and not self.organization_id:
            raise ConfigError("An organization id is required for secret-key clients")
        timeout = _DEFAULT_TIMEOUTS[self.key_type] if self.timeout is None else self.timeout
        object.__setattr__(self, "timeout", _parse_timeout(timeout))

    @property
    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        return default_base_url(self.credential, self.key_type)

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, str],
        *,
        key_type: str = KEY_TYPE_SECRET,
    ) -> "ClientConfig":
        try:
            credential_key = _CREDENTIAL_ENV_KEY[key_type]
        except KeyError as exc:
            raise ConfigError(f"Unknown key type '{key_type}'") from exc

        credential = values.get(credential_key)
        if not credential:
            raise ConfigError(f"{credential_key} must be provided")

        organization_id = values.get(_ORG_ID_ENV_KEY) or None
        if key_type == KEY_TYPE_SECRET and organization_id is None:
            raise ConfigError(f"{_ORG_ID_ENV_KEY} must be provided")

        timeout = _parse_timeout(
            values.get(_TIMEOUT_ENV_KEY, _DEFAULT_TIMEOUTS[key_type])
        )

        config = cls(
            credential=credential.strip(),
            organization_id=organization_id,
            base_url=values.get(_BASE_URL_ENV_KEY) or None,
            timeout=timeout,
            key_type=key_type,
        )
        logging.debug(
            "Loaded %s client configuration for %s", key_type, config.resolved_base_url
        )
        return config


def load_client_config(
    *,
    key_type: str = KEY_TYPE_SECRET,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    credential: Optional[str] = None,
    organization_id: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float | str] = None,
) -> ClientConfig:
    """
    Build a :class:`ClientConfig` from environment data.

    Values are layered in order of increasing precedence: the ``.env`` file,
    ``base`` (defaults to :data:`os.environ`), ``overrides`` and finally the
    explicit keyword arguments.
    """
    explicit: Dict[str, Any] = {
        _CREDENTIAL_ENV_KEY.get(key_type, "REEVIT_API_KEY"): credential,
        _ORG_ID_ENV_KEY: organization_id,
        _BASE_URL_ENV_KEY: base_url,
        _TIMEOUT_ENV_KEY: timeout,
    }
    merged_overrides = dict(overrides or {})
    merged_overrides.update(
        {key: str(value) for key, value in explicit.items() if value is not None}
    )

    environment = build_environment(
        env_file=env_file,
        base=base,
        overrides=merged_overrides,
    )
    return ClientConfig.from_mapping(environment.variables, key_type=key_type)
