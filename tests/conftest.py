"""Shared fixtures for the NVP client tests."""

from unittest.mock import MagicMock
from urllib.parse import urlencode

import pytest
import requests

from paypal_nvp import ClientConfig, ExpressCheckoutClient


class MockResponse:
    """Stand-in for :class:`requests.Response` with a fixed status and body."""

    def __init__(self, status_code, fields=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else urlencode(fields or {})


@pytest.fixture
def config():
    return ClientConfig(
        username="merchant_api1.example.com",
        password="secret",
        signature="sig-123",
        return_url="https://shop.example.com/paypal/return",
        cancel_url="https://shop.example.com/paypal/cancel",
        sandbox=True,
        timeout_seconds=5,
    )


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(config, session):
    return ExpressCheckoutClient(config, session=session)
