"""
Command-line interface for one-off calls against the Reevit API.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, Callable, Dict, Iterable, Sequence, Tuple

import requests

from .api import create_client
from .core.client import ReevitClient
from .core.config import ConfigError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = dataclasses.asdict(value)
        data.pop("raw", None)
        return data
    return value


_COMMANDS: Dict[Tuple[str, str], Callable[[ReevitClient, argparse.Namespace], Any]] = {
    ("payments", "list"): lambda c, a: c.payments.list(limit=a.limit, offset=a.offset),
    ("payments", "get"): lambda c, a: c.payments.get(a.payment_id),
    ("payments", "refund"): lambda c, a: c.payments.refund(
        a.payment_id, amount=a.amount, reason=a.reason
    ),
    ("payments", "confirm"): lambda c, a: c.payments.confirm(a.payment_id),
    ("payments", "cancel"): lambda c, a: c.payments.cancel(a.payment_id),
    ("connections", "list"): lambda c, a: c.connections.list(),
    ("subscriptions", "list"): lambda c, a: c.subscriptions.list(),
    ("fraud", "get"): lambda c, a: c.fraud.get(),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reevit",
        description="Call the Reevit payments API with a secret key",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing REEVIT_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )

    resources = parser.add_subparsers(dest="resource", required=True)

    payments = resources.add_parser("payments", help="Inspect and manage payments")
    payment_actions = payments.add_subparsers(dest="action", required=True)
    listing = payment_actions.add_parser("list", help="List recent payments")
    listing.add_argument("--limit", type=int, default=50)
    listing.add_argument("--offset", type=int, default=0)
    for action in ("get", "confirm", "cancel"):
        sub = payment_actions.add_parser(action, help=f"{action.capitalize()} a payment")
        sub.add_argument("payment_id")
    refund = payment_actions.add_parser("refund", help="Refund a payment")
    refund.add_argument("payment_id")
    refund.add_argument(
        "--amount", type=int, default=None, help="Partial amount in minor units"
    )
    refund.add_argument("--reason", default=None)

    for resource in ("connections", "subscriptions"):
        sub = resources.add_parser(resource, help=f"Inspect {resource}")
        sub.add_subparsers(dest="action", required=True).add_parser("list")

    fraud = resources.add_parser("fraud", help="Inspect the fraud policy")
    fraud.add_subparsers(dest="action", required=True).add_parser("get")
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        client = create_client(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    command = _COMMANDS[(args.resource, args.action)]
    try:
        with client:
            result = command(client, args)
    except requests.RequestException as exc:
        logging.error("Request failed: %s", exc)
        return 1

    json.dump(_to_jsonable(result), sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


def main() -> None:
    raise SystemExit(run_cli())
