"""
HTTP helpers that speak the gateway's name-value-pair encoding.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping
from urllib.parse import parse_qsl, urlencode

import requests

from .errors import RequestTimeoutError, StatusError, TransportError

__all__ = [
    "encode_params",
    "execute_request",
    "parse_response",
]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_params(params: Mapping[str, Any]) -> str:
    """URL-encode ``params``, skipping keys whose value is ``None``."""
    return urlencode([(key, str(value)) for key, value in params.items() if value is not None])


def parse_response(body: str) -> Dict[str, str]:
    return dict(parse_qsl(body, keep_blank_values=True))


def execute_request(
    session: requests.Session,
    url: str,
    method: str,
    params: Mapping[str, Any],
    *,
    timeout: float,
) -> Dict[str, str]:
    """
    Perform a single gateway call and return the decoded response fields.

    Any status code above 200 is treated as a failure and raises
    :class:`StatusError` with the raw body attached. Nothing is retried.
    """
    method = method.upper()
    encoded = encode_params(params)

    if method == "GET":
        target = f"{url}?{encoded}" if encoded else url
        headers = {"Content-Type": "text/plain"}
        data = None
    elif method == "POST":
        target = url
        data = encoded.encode("utf-8")
        headers = {
            "Content-Type": FORM_CONTENT_TYPE,
            "Content-Length": str(len(data)),
        }
    else:
        raise ValueError(f"Unsupported HTTP method '{method}'")

    try:
        response = session.request(method, target, data=data, headers=headers, timeout=timeout)
    except requests.exceptions.Timeout as exc:
        raise RequestTimeoutError(f"No response from {url} within {timeout} seconds") from exc
    except requests.exceptions.RequestException as exc:
        raise TransportError(f"Request to {url} failed: {exc}") from exc

    if response.status_code > 200:
        logging.warning("Gateway at %s responded with status %s", url, response.status_code)
        raise StatusError(response.status_code, response.text)

    return parse_response(response.text)
