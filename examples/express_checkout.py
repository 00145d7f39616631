"""
Minimal script that walks through both Express Checkout steps with the public API.
"""

from __future__ import annotations

import argparse
import logging
import sys

from paypal_nvp import (
    CheckoutOptions,
    ConfigError,
    NVPError,
    create_checkout_client,
    load_client_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pay an invoice through Express Checkout")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--invoice", default="INV-0001", help="Invoice number to charge")
    parser.add_argument("--amount", default="10", help="Amount to charge")
    parser.add_argument("--currency", default="USD", help="Currency code")
    parser.add_argument("--description", default="Example order", help="Order description")
    parser.add_argument(
        "--live",
        action="store_true",
        help="Use the production gateway instead of the sandbox",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(env_file=args.env_file, sandbox=not args.live)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_checkout_client(config=config)
    options = CheckoutOptions(description=args.description, currency=args.currency)

    try:
        redirect = client.initiate(args.invoice, args.amount, options)
    except NVPError as exc:
        logging.error("Could not start checkout: %s", exc)
        return 1

    print(f"Approve the payment at:\n  {redirect}")
    token = input("token from the return URL: ").strip()
    payer = input("PayerID from the return URL: ").strip()

    try:
        result = client.finalize(token, payer)
    except NVPError as exc:
        logging.error("Could not finalize checkout: %s", exc)
        return 1

    logging.info(
        "Invoice %s paid (%s %s), transaction %s",
        result.invoice,
        result.amount,
        result.currency,
        result.transaction_id,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
