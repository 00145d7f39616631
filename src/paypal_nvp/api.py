"""
Public, high-level helpers for running an Express Checkout.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

import requests

from .core.client import (
    CheckoutOptions,
    ExpressCheckoutClient,
    SaleResult,
)
from .core.config import ClientConfig, ClientParameters, load_client_config

__all__ = [
    "complete_checkout",
    "create_checkout_client",
    "start_checkout",
]


def create_checkout_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    **fields: Any,
) -> ExpressCheckoutClient:
    """
    Construct an :class:`ExpressCheckoutClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data and keyword arguments such as
    ``username=`` or ``sandbox=``.
    """
    if config is not None:
        extras = (overrides, base, parameters, *fields.values())
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            **fields,
        )
    return ExpressCheckoutClient(cfg, session=session)


def start_checkout(
    invoice: str,
    amount: Decimal | str | float | int,
    options: Optional[CheckoutOptions] = None,
    **client_kwargs: Any,
) -> str:
    """
    Initiate a checkout and return the buyer redirect URL.

    ``client_kwargs`` are forwarded to :func:`create_checkout_client`.
    """
    client = create_checkout_client(**client_kwargs)
    return client.initiate(invoice, amount, options)


def complete_checkout(token: str, payer: str, **client_kwargs: Any) -> SaleResult:
    """
    Finalize the checkout identified by ``token`` for ``payer``.
    """
    client = create_checkout_client(**client_kwargs)
    return client.finalize(token, payer)
