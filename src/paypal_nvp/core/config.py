"""
Client configuration for the Express Checkout NVP API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "load_client_config",
]

API_HOSTS = {
    True: "api-3t.sandbox.paypal.com",
    False: "api-3t.paypal.com",
}
REDIRECT_HOSTS = {
    True: "www.sandbox.paypal.com",
    False: "www.paypal.com",
}
DEFAULT_API_VERSION = "52.0"
DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "username": "PAYPAL_API_USERNAME",
    "password": "PAYPAL_API_PASSWORD",
    "signature": "PAYPAL_API_SIGNATURE",
    "return_url": "PAYPAL_RETURN_URL",
    "cancel_url": "PAYPAL_CANCEL_URL",
    "sandbox": "PAYPAL_SANDBOX",
    "timeout_seconds": "PAYPAL_TIMEOUT_SECONDS",
    "api_version": "PAYPAL_API_VERSION",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_bool(raw: str, field_name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{field_name} must be true or false, got '{raw}'")


def _require(values: Mapping[str, str], key: str) -> str:
    value = values.get(key)
    if value is None or not value.strip():
        raise ConfigError(f"{key} must be provided")
    return value.strip()


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for :func:`load_client_config`.

    Anything left as ``None`` falls back to the environment.
    """

    username: Optional[str] = None
    password: Optional[str] = None
    signature: Optional[str] = None
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None
    sandbox: Optional[bool | str] = None
    timeout_seconds: Optional[float | int | str] = None
    api_version: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


@dataclass(frozen=True)
class ClientConfig:
    """
    Credentials and endpoints for one merchant account.

    ``sandbox`` selects the test gateway for both the API and the hosted
    checkout page.
    """

    username: str
    password: str = field(repr=False)
    signature: str = field(repr=False)
    return_url: str
    cancel_url: str
    sandbox: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    api_version: str = DEFAULT_API_VERSION

    @property
    def api_url(self) -> str:
        return f"https://{API_HOSTS[self.sandbox]}/nvp"

    @property
    def redirect_url(self) -> str:
        return f"https://{REDIRECT_HOSTS[self.sandbox]}/cgi-bin/webscr"

    def credential_params(self) -> Dict[str, str]:
        """Fields every NVP request starts from."""
        return {
            "USER": self.username,
            "PWD": self.password,
            "SIGNATURE": self.signature,
            "VERSION": self.api_version,
        }

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        timeout_raw = values.get("PAYPAL_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout_seconds = float(timeout_raw)
        except ValueError as exc:
            raise ConfigError(
                f"PAYPAL_TIMEOUT_SECONDS must be a number, got '{timeout_raw}'"
            ) from exc
        if timeout_seconds <= 0:
            raise ConfigError("PAYPAL_TIMEOUT_SECONDS must be greater than zero")

        return cls(
            username=_require(values, "PAYPAL_API_USERNAME"),
            password=_require(values, "PAYPAL_API_PASSWORD"),
            signature=_require(values, "PAYPAL_API_SIGNATURE"),
            return_url=_require(values, "PAYPAL_RETURN_URL"),
            cancel_url=_require(values, "PAYPAL_CANCEL_URL"),
            sandbox=_parse_bool(values.get("PAYPAL_SANDBOX", "false"), "PAYPAL_SANDBOX"),
            timeout_seconds=timeout_seconds,
            api_version=values.get("PAYPAL_API_VERSION", DEFAULT_API_VERSION),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
    ) -> "ClientConfig":
        merged_overrides = dict(overrides or {})
        if parameters is not None:
            merged_overrides.update(parameters.as_overrides())

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        for key in sorted(environment.sources):
            logging.debug("%s taken from %s", key, environment.sources[key])
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    **fields: Any,
) -> ClientConfig:
    """
    Build a :class:`ClientConfig` from the environment, a ``.env`` file,
    keyword arguments, or any combination of the three.

    Keyword arguments use the :class:`ClientParameters` field names and take
    precedence over ``parameters``.
    """
    unknown = set(fields) - set(_PARAMETER_TO_ENV_KEY)
    if unknown:
        raise TypeError(f"Unknown client parameter(s): {', '.join(sorted(unknown))}")

    explicit = ClientParameters(**{k: v for k, v in fields.items() if v is not None})
    merged_overrides = dict(overrides or {})
    if parameters is not None:
        merged_overrides.update(parameters.as_overrides())
    merged_overrides.update(explicit.as_overrides())

    return ClientConfig.from_env(
        env_file=env_file,
        overrides=merged_overrides,
        base=base,
    )
