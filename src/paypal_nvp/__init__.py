"""
Public facade for the Express Checkout NVP client.

The most useful pieces are re-exported here so integrators can
``from paypal_nvp import ...`` without navigating the package.
"""

from .api import complete_checkout, create_checkout_client, start_checkout
from .core import (
    CheckoutOptions,
    ClientConfig,
    ClientParameters,
    ConfigError,
    CustomField,
    ExpressCheckoutClient,
    GatewayEnvironment,
    GatewayError,
    MissingFieldError,
    NVPError,
    RequestTimeoutError,
    SaleResult,
    StatusError,
    TransportError,
    build_environment,
    execute_request,
    finalize_checkout,
    format_amount,
    initiate_checkout,
    load_client_config,
    load_env_file,
)

__all__ = (
    "CheckoutOptions",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "CustomField",
    "ExpressCheckoutClient",
    "GatewayEnvironment",
    "GatewayError",
    "MissingFieldError",
    "NVPError",
    "RequestTimeoutError",
    "SaleResult",
    "StatusError",
    "TransportError",
    "build_environment",
    "complete_checkout",
    "create_checkout_client",
    "execute_request",
    "finalize_checkout",
    "format_amount",
    "initiate_checkout",
    "load_client_config",
    "load_env_file",
    "start_checkout",
)
