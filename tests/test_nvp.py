"""
Request executor tests.
"""

from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from paypal_nvp import RequestTimeoutError, StatusError, TransportError, execute_request
from paypal_nvp.core.nvp import encode_params, parse_response

from conftest import MockResponse

URL = "https://api-3t.sandbox.paypal.com/nvp"


def test_post_sends_form_body_with_content_length(session):
    session.request.return_value = MockResponse(200, {"ACK": "Success"})

    execute_request(session, URL, "POST", {"METHOD": "Ping", "AMT": "1.00"}, timeout=3)

    args, kwargs = session.request.call_args
    assert args == ("POST", URL)
    assert kwargs["data"] == b"METHOD=Ping&AMT=1.00"
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
    assert kwargs["headers"]["Content-Length"] == str(len(b"METHOD=Ping&AMT=1.00"))
    assert kwargs["timeout"] == 3


def test_get_appends_query_string(session):
    session.request.return_value = MockResponse(200, {"ACK": "Success"})

    execute_request(session, URL, "get", {"METHOD": "Ping", "DESC": "a b"}, timeout=3)

    args, kwargs = session.request.call_args
    assert args[0] == "GET"
    assert parse_qs(urlsplit(args[1]).query) == {"METHOD": ["Ping"], "DESC": ["a b"]}
    assert kwargs["data"] is None


def test_success_returns_all_fields(session):
    session.request.return_value = MockResponse(
        200,
        text="ACK=Success&TOKEN=EC%2d123&CUSTOM=INV1%7c10.00%7cUSD&NOTE=",
    )

    result = execute_request(session, URL, "POST", {}, timeout=3)

    assert result == {
        "ACK": "Success",
        "TOKEN": "EC-123",
        "CUSTOM": "INV1|10.00|USD",
        "NOTE": "",
    }


def test_server_error_raises_status_error(session):
    session.request.return_value = MockResponse(500, text="Internal Server Error")

    with pytest.raises(StatusError) as excinfo:
        execute_request(session, URL, "POST", {}, timeout=3)

    assert excinfo.value.status_code == 500
    assert excinfo.value.body == "Internal Server Error"


def test_status_above_200_is_a_failure(session):
    session.request.return_value = MockResponse(201, {"ACK": "Success"})

    with pytest.raises(StatusError):
        execute_request(session, URL, "POST", {}, timeout=3)


def test_timeout_raises_request_timeout_error(session):
    session.request.side_effect = requests.exceptions.ReadTimeout("too slow")

    with pytest.raises(RequestTimeoutError) as excinfo:
        execute_request(session, URL, "POST", {}, timeout=0.5)

    assert isinstance(excinfo.value, TimeoutError)


def test_connection_failure_raises_transport_error(session):
    session.request.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(TransportError):
        execute_request(session, URL, "POST", {}, timeout=3)


def test_unsupported_method_is_rejected(session):
    with pytest.raises(ValueError):
        execute_request(session, URL, "PUT", {}, timeout=3)
    session.request.assert_not_called()


def test_encode_params_skips_none_and_stringifies():
    assert encode_params({"A": 1, "B": None, "C": "x y"}) == "A=1&C=x+y"


def test_parse_response_keeps_last_repeated_key():
    assert parse_response("A=1&A=2") == {"A": "2"}
