"""
Amount formatting and the custom field carried across the checkout redirect.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from .errors import MissingFieldError

__all__ = [
    "CUSTOM_DELIMITER",
    "CustomField",
    "format_amount",
]

CUSTOM_DELIMITER = "|"


def format_amount(value: Decimal | str | float | int) -> str:
    """
    Render ``value`` with exactly two fractional digits.

    A comma decimal separator is accepted. Extra digits are truncated, not
    rounded: ``format_amount(5.129) == "5.12"``.
    """
    if isinstance(value, float):
        value = Decimal(repr(value))
    if isinstance(value, Decimal):
        text = format(value, "f")
    else:
        text = str(value).strip().replace(",", ".", 1)

    index = text.find(".")
    if index == -1:
        return text + ".00"

    fraction_length = len(text) - index - 1
    if fraction_length == 0:
        return text + "00"
    if fraction_length == 1:
        return text + "0"
    return text[: index + 3]


@dataclass(frozen=True)
class CustomField:
    """
    Invoice, amount and currency packed into the gateway's ``CUSTOM`` field.

    The delimiter is not escaped, so none of the components may contain it.
    """

    invoice: str
    amount: str
    currency: str

    def encode(self) -> str:
        return CUSTOM_DELIMITER.join((self.invoice, self.amount, self.currency))

    @classmethod
    def decode(cls, value: str) -> "CustomField":
        parts = value.split(CUSTOM_DELIMITER)
        if len(parts) < 3:
            raise MissingFieldError("CUSTOM", {"CUSTOM": value}, reason="malformed")
        return cls(invoice=parts[0], amount=parts[1], currency=parts[2])

    @classmethod
    def from_response(cls, response: Mapping[str, str]) -> "CustomField":
        value = response.get("CUSTOM")
        if value is None:
            raise MissingFieldError("CUSTOM", dict(response))
        try:
            return cls.decode(value)
        except MissingFieldError as exc:
            raise MissingFieldError("CUSTOM", dict(response), reason="malformed") from exc
