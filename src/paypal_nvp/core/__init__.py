"""
Core primitives that implement the Express Checkout flow.
"""

from .client import (
    CheckoutOptions,
    ExpressCheckoutClient,
    SaleResult,
    finalize_checkout,
    initiate_checkout,
)
from .config import (
    ClientConfig,
    ClientParameters,
    ConfigError,
    load_client_config,
)
from .environment import GatewayEnvironment, build_environment, load_env_file
from .errors import (
    GatewayError,
    MissingFieldError,
    NVPError,
    RequestTimeoutError,
    StatusError,
    TransportError,
)
from .formatting import CustomField, format_amount
from .nvp import encode_params, execute_request, parse_response

__all__ = [
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
    "encode_params",
    "execute_request",
    "finalize_checkout",
    "format_amount",
    "initiate_checkout",
    "load_client_config",
    "load_env_file",
    "parse_response",
]
