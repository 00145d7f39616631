"""
Command-line interface for driving an Express Checkout by hand.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Sequence, Tuple

import requests

from .api import create_checkout_client
from .core.client import CheckoutOptions, SaleResult
from .core.config import ConfigError
from .core.errors import NVPError


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
    return {key: value for key, value in pairs}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paypal-nvp",
        description="Run the Express Checkout steps against the NVP API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings (default: .env)",
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
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    initiate = commands.add_parser("initiate", help="Start a checkout and print the redirect URL")
    initiate.add_argument("invoice", help="Merchant invoice number")
    initiate.add_argument("amount", help="Amount to charge, e.g. 19.99")
    initiate.add_argument("--description", help="Order description shown to the buyer")
    initiate.add_argument("--currency", default="USD", help="Currency code (default: USD)")
    initiate.add_argument("--logo-image", help="URL of the logo shown on the checkout page")
    initiate.add_argument(
        "--allow-shipping",
        action="store_true",
        help="Ask the buyer for a shipping address",
    )

    finalize = commands.add_parser("finalize", help="Capture a checkout the buyer approved")
    finalize.add_argument("token", help="Checkout token from the return URL")
    finalize.add_argument("payer_id", help="PayerID from the return URL")
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        client = create_checkout_client(
            env_file=args.env_file,
            overrides=overrides,
            session=requests.Session(),
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    if args.command == "initiate":
        options = CheckoutOptions(
            description=args.description,
            currency=args.currency,
            no_shipping=not args.allow_shipping,
            logo_image=args.logo_image,
        )
        try:
            url = client.initiate(args.invoice, args.amount, options)
        except NVPError as exc:
            logging.error("SetExpressCheckout failed: %s", exc)
            return 1
        print(url)
        return 0

    try:
        result = client.finalize(args.token, args.payer_id)
    except NVPError as exc:
        logging.error("Checkout could not be finalized: %s", exc)
        if exc.details is not None:
            logging.error("Checkout details: %s", exc.details)
        return 1
    return _handle_sale(result)


def _handle_sale(result: SaleResult) -> int:
    logging.info(
        "Invoice %s paid: %s %s (ack %s)",
        result.invoice,
        result.amount,
        result.currency,
        result.ack,
    )
    print(result.transaction_id or "", result.invoice, result.amount)
    return 0


def main() -> None:
    sys.exit(run_cli())
