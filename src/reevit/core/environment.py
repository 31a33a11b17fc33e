"""
Environment helpers for the Reevit client.

Two unrelated meanings of "environment" live here: the process/.env variables
used to configure a client, and the sandbox/production API environment that a
credential belongs to.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional, Tuple

__all__ = [
    "API_BASE_URL_PRODUCTION",
    "API_BASE_URL_SANDBOX",
    "KEY_TYPE_PUBLISHABLE",
    "KEY_TYPE_SECRET",
    "ClientEnvironment",
    "build_environment",
    "default_base_url",
    "detect_environment",
    "load_env_file",
]

API_BASE_URL_PRODUCTION = "https://api.reevit.io"
API_BASE_URL_SANDBOX = "https://sandbox-api.reevit.io"

KEY_TYPE_PUBLISHABLE = "publishable"
KEY_TYPE_SECRET = "secret"

_SANDBOX_PREFIXES: Dict[str, Tuple[str, ...]] = {
    KEY_TYPE_PUBLISHABLE: ("pk_test_", "pk_sandbox_"),
    KEY_TYPE_SECRET: ("sk_test_", "sk_sandbox_"),
}


def detect_environment(credential: str, key_type: str = KEY_TYPE_SECRET) -> str:
    """
    Return ``"sandbox"`` or ``"production"`` for ``credential``.

    Only the prefixes registered for ``key_type`` are considered, so a
    ``pk_test_`` key checked as a secret key resolves to production.
    """
    try:
        prefixes = _SANDBOX_PREFIXES[key_type]
    except KeyError as exc:
        raise ValueError(f"Unknown key type '{key_type}'") from exc
    if credential.startswith(prefixes):
        return "sandbox"
    return "production"


def default_base_url(credential: str, key_type: str = KEY_TYPE_SECRET) -> str:
    if detect_environment(credential, key_type) == "sandbox":
        return API_BASE_URL_SANDBOX
    return API_BASE_URL_PRODUCTION


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Load ``REEVIT_*`` style variables from ``path`` into ``environ``.

    Keys already present in ``environ`` are left alone. Returns the merged
    mapping.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in _parse_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    """Resolved variables used to configure a client."""

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Merge ``base`` (defaults to :data:`os.environ`), an optional ``.env`` file
    and ``overrides`` into a :class:`ClientEnvironment`.

    File values never replace ``base`` values; ``overrides`` always win.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return ClientEnvironment(variables=merged)
