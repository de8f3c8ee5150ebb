"""
Performs the HTTP exchange for a :class:`PreparedCall`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import requests

from .config import ClientConfig
from .errors import TransportError
from .request import Header, PreparedCall
from .response import ApiResponse

__all__ = ["combine_headers", "execute"]


def combine_headers(headers: Sequence[Header]) -> Dict[str, str]:
    """
    Fold repeated header names into one comma-separated field, keeping order.
    """
    combined: Dict[str, str] = {}
    canonical: Dict[str, str] = {}
    for name, value in headers:
        key = canonical.setdefault(name.lower(), name)
        if key in combined:
            combined[key] = f"{combined[key]}, {value}"
        else:
            combined[key] = value
    return combined


def _diagnostics(response: requests.Response) -> Dict[str, Any]:
    request = response.request
    return {
        "url": response.url,
        "method": request.method if request is not None else None,
        "status_code": response.status_code,
        "reason": response.reason,
        "elapsed_seconds": response.elapsed.total_seconds(),
        "request_headers": dict(request.headers) if request is not None else {},
        "response_headers": dict(response.headers),
        "content_length": len(response.content),
        "redirects": [item.url for item in response.history],
    }


def execute(
    session: requests.Session,
    call: PreparedCall,
    config: ClientConfig,
    *,
    timeout: Optional[float] = None,
) -> ApiResponse:
    """
    Send ``call`` once and normalize the answer.

    Transport failures raise :class:`TransportError`; HTTP error statuses are
    returned like any other response.
    """
    logging.debug("Sending %s request to %s", call.method, call.url)
    try:
        response = session.request(
            call.method,
            call.url,
            headers=combine_headers(call.headers),
            data=call.body,
            timeout=timeout if timeout is not None else config.timeout_seconds,
        )
    except requests.RequestException as exc:
        raise TransportError(
            f"{call.method} {call.url} failed: {exc}",
            method=call.method,
            url=call.url,
        ) from exc

    logging.debug("%s %s answered %s", call.method, call.url, response.status_code)
    return ApiResponse.from_response(
        response,
        decode=config.decode,
        diagnostics=_diagnostics(response) if config.debug else None,
    )
