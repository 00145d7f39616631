"""
Command-line interface tests.
"""

from unittest.mock import MagicMock, patch

import pytest

from paypal_nvp.cli import build_parser, run_cli

from conftest import MockResponse

SETTINGS = [
    "--set", "PAYPAL_API_USERNAME=merchant",
    "--set", "PAYPAL_API_PASSWORD=pw",
    "--set", "PAYPAL_API_SIGNATURE=sig",
    "--set", "PAYPAL_RETURN_URL=https://shop.example.com/return",
    "--set", "PAYPAL_CANCEL_URL=https://shop.example.com/cancel",
]


@pytest.fixture
def http_session():
    with patch("paypal_nvp.cli.requests.Session") as session_cls:
        session = MagicMock()
        session_cls.return_value = session
        yield session


def test_override_requires_key_value():
    parser = build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["--set", "NOVALUE", "initiate", "INV1", "1"])


def test_initiate_prints_redirect_url(tmp_path, http_session, capsys):
    http_session.request.return_value = MockResponse(200, {"ACK": "Success", "TOKEN": "T1"})

    code = run_cli(["--env-file", str(tmp_path / ".env"), *SETTINGS, "initiate", "INV1", "12.5"])

    assert code == 0
    assert "token=T1" in capsys.readouterr().out


def test_initiate_failure_exits_nonzero(tmp_path, http_session):
    http_session.request.return_value = MockResponse(200, {"ACK": "Failure", "L_LONGMESSAGE0": "nope"})

    code = run_cli(["--env-file", str(tmp_path / ".env"), *SETTINGS, "initiate", "INV1", "12.5"])

    assert code == 1


def test_finalize_prints_transaction(tmp_path, http_session, capsys):
    http_session.request.side_effect = [
        MockResponse(200, {"ACK": "Success", "CUSTOM": "INV1|12.50|USD"}),
        MockResponse(200, {"ACK": "Success", "TRANSACTIONID": "TX1"}),
    ]

    code = run_cli(["--env-file", str(tmp_path / ".env"), *SETTINGS, "finalize", "T1", "PAYER9"])

    assert code == 0
    assert capsys.readouterr().out.split() == ["TX1", "INV1", "12.50"]


def test_invalid_configuration_exits_nonzero(tmp_path, http_session, monkeypatch):
    monkeypatch.delenv("PAYPAL_API_SIGNATURE", raising=False)
    settings = []
    for flag, value in zip(SETTINGS[::2], SETTINGS[1::2]):
        if not value.startswith("PAYPAL_API_SIGNATURE"):
            settings.extend([flag, value])

    code = run_cli(["--env-file", str(tmp_path / ".env"), *settings, "finalize", "T1", "PAYER9"])

    assert code == 1
    http_session.request.assert_not_called()
