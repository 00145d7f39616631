"""
Express Checkout operations on top of the NVP request helpers.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from .config import ClientConfig
from .errors import GatewayError, MissingFieldError, NVPError
from .formatting import CustomField, format_amount
from .nvp import execute_request

__all__ = [
    "CheckoutOptions",
    "ExpressCheckoutClient",
    "SaleResult",
    "finalize_checkout",
    "initiate_checkout",
]

SUCCESS_ACKS = ("Success", "SuccessWithWarning")


@dataclass(frozen=True)
class CheckoutOptions:
    description: Optional[str] = None
    currency: str = "USD"
    no_shipping: bool = True
    logo_image: Optional[str] = None
    allow_note: bool = True


@dataclass(frozen=True)
class SaleResult:
    """
    Outcome of a finalized checkout.

    ``response`` is the DoExpressCheckoutPayment answer and ``details`` the
    GetExpressCheckoutDetails answer that preceded it.
    """

    response: Dict[str, str]
    details: Dict[str, str]
    invoice: str
    amount: str
    currency: str

    @property
    def ack(self) -> Optional[str]:
        return self.response.get("ACK")

    @property
    def transaction_id(self) -> Optional[str]:
        return self.response.get("TRANSACTIONID") or self.response.get(
            "PAYMENTINFO_0_TRANSACTIONID"
        )


class ExpressCheckoutClient:
    """
    Starts and completes Express Checkout payments for one merchant account.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def call(self, method: str, fields: Mapping[str, Any]) -> Dict[str, str]:
        """
        POST the NVP ``method`` with the merchant credentials and ``fields``.
        """
        params: Dict[str, Any] = self.config.credential_params()
        params.update(fields)
        params["METHOD"] = method
        logging.info("Calling %s at %s", method, self.config.api_url)
        return execute_request(
            self.session,
            self.config.api_url,
            "POST",
            params,
            timeout=self.config.timeout_seconds,
        )

    def checkout_url(self, token: str) -> str:
        query = urlencode({"cmd": "_express-checkout", "useraction": "commit", "token": token})
        return f"{self.config.redirect_url}?{query}"

    def initiate(
        self,
        invoice: str,
        amount: Decimal | str | float | int,
        options: Optional[CheckoutOptions] = None,
    ) -> str:
        """
        Register the payment with SetExpressCheckout and return the URL the
        buyer must be redirected to.
        """
        options = options or CheckoutOptions()
        formatted = format_amount(amount)
        custom = CustomField(invoice=str(invoice), amount=formatted, currency=options.currency)

        response = self.call(
            "SetExpressCheckout",
            {
                "PAYMENTACTION": "Sale",
                "AMT": formatted,
                "RETURNURL": self.config.return_url,
                "CANCELURL": self.config.cancel_url,
                "DESC": options.description,
                "NOSHIPPING": 1 if options.no_shipping else 0,
                "ALLOWNOTE": 1 if options.allow_note else 0,
                "CURRENCYCODE": options.currency,
                "INVNUM": invoice,
                "CUSTOM": custom.encode(),
                "LOGOIMG": options.logo_image,
            },
        )

        if response.get("ACK") != "Success":
            logging.warning("SetExpressCheckout for invoice %s was rejected: %s", invoice, response)
            raise GatewayError(response)

        token = response.get("TOKEN")
        if not token:
            raise MissingFieldError("TOKEN", response)
        return self.checkout_url(token)

    def finalize(self, token: str, payer: str) -> SaleResult:
        """
        Look up the checkout behind ``token`` and capture it as a sale.

        The amount and currency come from the custom field stored by
        :meth:`initiate`. Errors from the sale call carry the looked-up
        details in their ``details`` attribute.
        """
        details = self.call("GetExpressCheckoutDetails", {"TOKEN": token})
        if "ACK" in details and details["ACK"] not in SUCCESS_ACKS:
            raise GatewayError(details)

        custom = CustomField.from_response(details)

        try:
            response = self.call(
                "DoExpressCheckoutPayment",
                {
                    "PAYMENTACTION": "Sale",
                    "PAYERID": payer,
                    "TOKEN": token,
                    "AMT": custom.amount,
                    "CURRENCYCODE": custom.currency,
                },
            )
            if "ACK" in response and response["ACK"] not in SUCCESS_ACKS:
                raise GatewayError(response)
        except NVPError as exc:
            logging.warning("DoExpressCheckoutPayment for invoice %s failed: %s", custom.invoice, exc)
            exc.details = details
            raise

        logging.info("Captured %s %s for invoice %s", custom.amount, custom.currency, custom.invoice)
        return SaleResult(
            response=response,
            details=details,
            invoice=custom.invoice,
            amount=custom.amount,
            currency=custom.currency,
        )

    def finalize_return(self, query: Mapping[str, str]) -> SaleResult:
        """
        Finalize from the query string the gateway appends to the return URL.
        """
        try:
            token = query["token"]
            payer = query["PayerID"]
        except KeyError as exc:
            raise ValueError(f"Return query is missing '{exc.args[0]}'") from exc
        return self.finalize(token, payer)

    async def initiate_async(
        self,
        invoice: str,
        amount: Decimal | str | float | int,
        options: Optional[CheckoutOptions] = None,
    ) -> str:
        """
        Run :meth:`initiate` on a worker thread.

        The thread uses this client's ``requests.Session``, which is not
        thread-safe; give each concurrently awaited checkout its own client.
        """
        return await asyncio.to_thread(self.initiate, invoice, amount, options)

    async def finalize_async(self, token: str, payer: str) -> SaleResult:
        """
        Run :meth:`finalize` on a worker thread; both gateway calls stay in order.

        Shares this client's session, see :meth:`initiate_async`.
        """
        return await asyncio.to_thread(self.finalize, token, payer)


def initiate_checkout(
    config: ClientConfig,
    invoice: str,
    amount: Decimal | str | float | int,
    options: Optional[CheckoutOptions] = None,
    *,
    session: Optional[requests.Session] = None,
) -> str:
    client = ExpressCheckoutClient(config, session=session)
    return client.initiate(invoice, amount, options)


def finalize_checkout(
    config: ClientConfig,
    token: str,
    payer: str,
    *,
    session: Optional[requests.Session] = None,
) -> SaleResult:
    client = ExpressCheckoutClient(config, session=session)
    return client.finalize(token, payer)
