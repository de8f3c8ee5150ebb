"""
Normalized result of a single API call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

__all__ = ["ApiResponse", "SUCCESS_STATUSES"]

SUCCESS_STATUSES = frozenset({200, 201, 202})


def _decode_json(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    body: Any
    headers: Dict[str, str]
    diagnostics: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status_code in SUCCESS_STATUSES

    @classmethod
    def from_response(
        cls,
        response: requests.Response,
        *,
        decode: bool,
        diagnostics: Optional[Dict[str, Any]] = None,
    ) -> "ApiResponse":
        """
        Build the result, decoding the body as JSON when ``decode`` is set or
        the status is not a success code. Otherwise the raw bytes are kept.
        """
        status_code = response.status_code
        if decode or status_code not in SUCCESS_STATUSES:
            body = _decode_json(response)
        else:
            body = response.content
        return cls(
            status_code=status_code,
            body=body,
            headers=dict(response.headers),
            diagnostics=diagnostics,
        )
