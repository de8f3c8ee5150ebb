"""
Exception types and the shared response classifier.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Tuple, Union

from .response import SUCCESS_STATUSES, ApiResponse

__all__ = [
    "ApiError",
    "ConfigError",
    "PlugContaError",
    "RecognizedErrorBody",
    "TransportError",
    "UnrecognizedErrorBody",
    "UnrecognizedResponseError",
    "classify_response",
    "parse_error_body",
]


class PlugContaError(Exception):
    """Base class for every error raised by the client."""


class ConfigError(PlugContaError):
    """Raised when the supplied configuration is invalid."""


class TransportError(PlugContaError):
    """
    Raised when the HTTP exchange itself failed (DNS, TLS, timeout, reset).

    The underlying ``requests`` exception is available as ``__cause__``.
    """

    def __init__(self, message: str, *, method: str, url: str) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class ApiError(PlugContaError):
    """The API answered with a non-success status and a readable error body."""

    def __init__(self, response: ApiResponse, messages: Tuple[str, ...]) -> None:
        super().__init__("\n".join(messages))
        self.response = response
        self.messages = messages

    @property
    def status_code(self) -> int:
        return self.response.status_code


class UnrecognizedResponseError(PlugContaError):
    """The API answered with a non-success status and an unexpected body."""

    def __init__(self, response: ApiResponse) -> None:
        super().__init__(_serialize_response(response))
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code


@dataclass(frozen=True)
class RecognizedErrorBody:
    message: str
    sub_errors: Tuple[str, ...] = field(default_factory=tuple)

    def messages(self) -> Tuple[str, ...]:
        return (self.message, *self.sub_errors)


@dataclass(frozen=True)
class UnrecognizedErrorBody:
    raw: Any


ErrorBody = Union[RecognizedErrorBody, UnrecognizedErrorBody]


def parse_error_body(body: Any) -> ErrorBody:
    """
    Decide whether a decoded error body has the ``{message, errors[]}`` shape.

    Entries of ``errors`` without a ``message`` are ignored.
    """
    if not isinstance(body, Mapping) or body.get("message") is None:
        return UnrecognizedErrorBody(raw=body)

    sub_errors: List[str] = []
    nested = body.get("errors")
    if isinstance(nested, list):
        for entry in nested:
            if isinstance(entry, Mapping) and entry.get("message") is not None:
                sub_errors.append(str(entry["message"]))

    return RecognizedErrorBody(message=str(body["message"]), sub_errors=tuple(sub_errors))


def classify_response(response: ApiResponse) -> ApiResponse:
    """
    Return ``response`` when its status is a success code, raise otherwise.
    """
    if response.status_code in SUCCESS_STATUSES:
        return response

    parsed = parse_error_body(response.body)
    if isinstance(parsed, RecognizedErrorBody):
        raise ApiError(response, parsed.messages())
    raise UnrecognizedResponseError(response)


def _serialize_response(response: ApiResponse) -> str:
    body: Any = response.body
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    payload: dict[str, Any] = {"statusCode": response.status_code, "body": body}
    if response.diagnostics is not None:
        payload["diagnostics"] = response.diagnostics
    return json.dumps(payload, default=str, ensure_ascii=False)

