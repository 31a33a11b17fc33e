"""
Minimal script that creates a payment intent through the checkout client.
"""

from __future__ import annotations

import argparse
import logging
import sys

from reevit import CheckoutConfig, ConfigError, create_checkout_client


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Reevit payment intent")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing REEVIT_PUBLIC_KEY",
    )
    parser.add_argument("--public-key", help="Publishable key (pk_...)")
    parser.add_argument("--amount", type=int, required=True, help="Amount in minor units")
    parser.add_argument("--currency", default="GHS")
    parser.add_argument(
        "--method",
        default="mobile_money",
        choices=("card", "mobile_money", "bank_transfer"),
    )
    parser.add_argument("--country", default="GH")
    parser.add_argument("--customer-id", help="Attach the intent to a customer")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_checkout_client(env_file=args.env_file, public_key=args.public_key)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    metadata = {"customerId": args.customer_id} if args.customer_id else None
    with client:
        result = client.create_payment_intent(
            CheckoutConfig(amount=args.amount, currency=args.currency, metadata=metadata),
            args.method,
            country=args.country,
        )

    if result.error is not None:
        logging.error("Payment intent failed [%s]: %s", result.error.code, result.error.message)
        return 1

    intent = result.data
    logging.info(
        "Created intent %s via %s (status %s, net %s %s)",
        intent.id,
        intent.provider,
        intent.status,
        intent.net_amount,
        intent.fee_currency,
    )
    print(intent.client_secret)
    return 0


if __name__ == "__main__":
    sys.exit(main())
