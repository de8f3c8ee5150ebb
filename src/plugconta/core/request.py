"""
Turns a logical operation into a fully resolved HTTP request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union
from urllib.parse import quote_plus

from .config import ClientConfig
from .encoding import encode_body

__all__ = [
    "Header",
    "PreparedCall",
    "QueryParam",
    "build_query_string",
    "build_request",
    "default_headers",
    "normalize_path",
    "normalize_params",
]

Header = Tuple[str, str]

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class QueryParam(NamedTuple):
    name: str
    value: str


ParamLike = Union[QueryParam, Tuple[str, Any], Mapping[str, Any]]


@dataclass(frozen=True)
class PreparedCall:
    method: str
    url: str
    headers: Tuple[Header, ...]
    body: Optional[bytes] = None

    def header_values(self, name: str) -> List[str]:
        wanted = name.lower()
        return [value for key, value in self.headers if key.lower() == wanted]


def normalize_path(path: str) -> str:
    return path if path.startswith("/") else "/" + path


def _as_param(item: ParamLike) -> QueryParam:
    if isinstance(item, Mapping):
        name, value = item.get("name"), item.get("value")
    else:
        name, value = item
    return QueryParam("" if name is None else str(name), "" if value is None else str(value))


def normalize_params(params: Optional[Iterable[ParamLike]]) -> List[QueryParam]:
    """
    Accept ``QueryParam``, ``(name, value)`` pairs or ``{"name", "value"}`` dicts.
    """
    return [_as_param(item) for item in params or ()]


def build_query_string(params: Optional[Iterable[ParamLike]]) -> str:
    """
    Join the non-empty parameters in their given order, form-encoded.

    >>> build_query_string([("a", "1"), ("b", ""), ("c d", "x/y")])
    'a=1&c+d=x%2Fy'
    """
    pairs = [
        f"{quote_plus(param.name)}={quote_plus(param.value)}"
        for param in normalize_params(params)
        if param.name and param.value
    ]
    return "&".join(pairs)


def default_headers(config: ClientConfig, content_type: Optional[str] = None) -> List[Header]:
    return [
        ("cnpjsh", config.credential_id),
        ("tokensh", config.credential_token),
        ("Content-Type", content_type or config.content_type),
    ]


def build_request(
    method: str,
    path: str,
    config: ClientConfig,
    *,
    params: Optional[Iterable[ParamLike]] = None,
    body: Optional[Mapping[str, Any]] = None,
    headers: Optional[Sequence[Header]] = None,
    include_defaults: bool = True,
) -> PreparedCall:
    """
    Resolve URL, header list and encoded body for one call.

    Caller headers are appended after the defaults and never replace them.
    """
    method = method.upper()
    url = config.base_url + normalize_path(path)
    query = build_query_string(params)
    if query:
        url = f"{url}?{query}"

    encoded = encode_body(body, config.upload) if method in _BODY_METHODS else None

    merged: List[Header] = []
    if include_defaults:
        merged.extend(default_headers(config, encoded.content_type if encoded else None))
    merged.extend((str(name), str(value)) for name, value in headers or ())

    return PreparedCall(
        method=method,
        url=url,
        headers=tuple(merged),
        body=encoded.content if encoded else None,
    )
