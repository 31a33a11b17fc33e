"""
Public, high-level helpers for constructing Reevit clients.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import ReevitAPIClient, ReevitClient
from .core.config import ClientConfig, load_client_config
from .core.environment import KEY_TYPE_PUBLISHABLE, KEY_TYPE_SECRET

__all__ = [
    "create_checkout_client",
    "create_client",
]


def _resolve_config(
    key_type: str,
    *,
    config: Optional[ClientConfig],
    env_file: Optional[str],
    base: Optional[Mapping[str, str]],
    overrides: Optional[Mapping[str, str]],
    credential: Optional[str],
    organization_id: Optional[str],
    base_url: Optional[str],
    timeout: Optional[float | str],
) -> ClientConfig:
    if config is not None:
        extras = (base, overrides, credential, organization_id, base_url, timeout)
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        return config
    return load_client_config(
        key_type=key_type,
        env_file=env_file,
        base=base,
        overrides=overrides,
        credential=credential,
        organization_id=organization_id,
        base_url=base_url,
        timeout=timeout,
    )


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    api_key: Optional[str] = None,
    org_id: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float | str] = None,
) -> ReevitClient:
    """
    Construct a secret-key :class:`ReevitClient`.

    Callers either pass a ready-made :class:`ClientConfig` or let the helper
    read ``REEVIT_API_KEY``, ``REEVIT_ORG_ID``, ``REEVIT_BASE_URL`` and
    ``REEVIT_TIMEOUT_SECONDS`` from the environment and ``env_file``.
    """
    cfg = _resolve_config(
        KEY_TYPE_SECRET,
        config=config,
        env_file=env_file,
        base=base,
        overrides=overrides,
        credential=api_key,
        organization_id=org_id,
        base_url=base_url,
        timeout=timeout,
    )
    return ReevitClient(config=cfg, session=session)


def create_checkout_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    public_key: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float | str] = None,
) -> ReevitAPIClient:
    """
    Construct a publishable-key :class:`ReevitAPIClient` (``REEVIT_PUBLIC_KEY``).
    """
    cfg = _resolve_config(
        KEY_TYPE_PUBLISHABLE,
        config=config,
        env_file=env_file,
        base=base,
        overrides=overrides,
        credential=public_key,
        organization_id=None,
        base_url=base_url,
        timeout=timeout,
    )
    return ReevitAPIClient(config=cfg, session=session)
