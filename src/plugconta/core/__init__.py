"""
Core primitives: configuration, request building, execution and errors.
"""

from .client import PlugContaClient, only_digits
from .config import (
    PRODUCTION_URL,
    STAGING_URL,
    ClientConfig,
    ClientParameters,
    load_client_config,
)
from .encoding import EncodedBody, encode_body, flatten_form_data
from .environment import ENV_PREFIX, ClientEnvironment, build_environment, read_env_file
from .errors import (
    ApiError,
    ConfigError,
    PlugContaError,
    RecognizedErrorBody,
    TransportError,
    UnrecognizedErrorBody,
    UnrecognizedResponseError,
    classify_response,
    parse_error_body,
)
from .executor import execute
from .request import PreparedCall, QueryParam, build_query_string, build_request
from .response import SUCCESS_STATUSES, ApiResponse

__all__ = [
    "PRODUCTION_URL",
    "STAGING_URL",
    "SUCCESS_STATUSES",
    "ApiError",
    "ApiResponse",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "ENV_PREFIX",
    "EncodedBody",
    "PlugContaClient",
    "PlugContaError",
    "PreparedCall",
    "QueryParam",
    "RecognizedErrorBody",
    "TransportError",
    "UnrecognizedErrorBody",
    "UnrecognizedResponseError",
    "build_environment",
    "build_query_string",
    "build_request",
    "classify_response",
    "encode_body",
    "execute",
    "flatten_form_data",
    "load_client_config",
    "read_env_file",
    "only_digits",
    "parse_error_body",
]
