"""
Public facade for the PlugConta client package.

The most useful pieces are re-exported so integrators can
``from plugconta import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    PRODUCTION_URL,
    STAGING_URL,
    SUCCESS_STATUSES,
    ApiError,
    ApiResponse,
    ClientConfig,
    ClientEnvironment,
    ClientParameters,
    ConfigError,
    PlugContaClient,
    PlugContaError,
    QueryParam,
    TransportError,
    UnrecognizedResponseError,
    build_environment,
    classify_response,
    flatten_form_data,
    load_client_config,
    read_env_file,
    only_digits,
)

__all__ = (
    "PRODUCTION_URL",
    "STAGING_URL",
    "SUCCESS_STATUSES",
    "ApiError",
    "ApiResponse",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "PlugContaClient",
    "PlugContaError",
    "QueryParam",
    "TransportError",
    "UnrecognizedResponseError",
    "build_environment",
    "classify_response",
    "create_client",
    "flatten_form_data",
    "load_client_config",
    "read_env_file",
    "only_digits",
)
