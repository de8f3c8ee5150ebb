"""
Request body serialization: JSON, or multipart form-data with bracketed keys.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from urllib3 import encode_multipart_formdata

__all__ = ["EncodedBody", "encode_body", "flatten_form_data", "is_file_value"]

FormPart = Union[str, Tuple[str, bytes], Tuple[str, bytes, str]]


@dataclass(frozen=True)
class EncodedBody:
    content: bytes
    content_type: str


def _is_nested(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (str, bytes, bytearray)) or is_file_value(value):
        return False
    return isinstance(value, Sequence)


def _entries(value: Any):
    if isinstance(value, Mapping):
        return value.items()
    return enumerate(value)


def flatten_form_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Flatten nested mappings and sequences into ``parent[child]`` keys.

    >>> flatten_form_data({"a": {"b": {"c": 1}}, "d": [1, 2]})
    {'a[b][c]': 1, 'd[0]': 1, 'd[1]': 2}
    """
    flat: Dict[str, Any] = dict(data)
    while any(_is_nested(value) for value in flat.values()):
        expanded: Dict[str, Any] = {}
        for key, value in flat.items():
            if not _is_nested(value):
                expanded[key] = value
                continue
            for sub_key, sub_value in _entries(value):
                expanded[f"{key}[{sub_key}]"] = sub_value
        flat = expanded
    return flat


def is_file_value(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray)):
        return True
    if isinstance(value, tuple):
        # only (filename, data[, content_type]) with binary data is a file part
        return (
            len(value) in (2, 3)
            and isinstance(value[0], str)
            and (isinstance(value[1], (bytes, bytearray)) or hasattr(value[1], "read"))
        )
    return hasattr(value, "read")


def _file_part(key: str, value: Any) -> FormPart:
    if isinstance(value, tuple):
        filename, data, *rest = value
        if hasattr(data, "read"):
            data = data.read()
        return (filename, data, rest[0]) if rest else (filename, data)
    if isinstance(value, (bytes, bytearray)):
        return (key, bytes(value))
    filename = os.path.basename(getattr(value, "name", "") or key)
    return (filename, value.read())


def _text_part(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _form_fields(body: Mapping[str, Any]) -> List[Tuple[str, FormPart]]:
    fields: List[Tuple[str, FormPart]] = []
    for key, value in flatten_form_data(body).items():
        if is_file_value(value):
            fields.append((key, _file_part(key, value)))
        else:
            fields.append((key, _text_part(value)))
    return fields


def encode_body(body: Optional[Mapping[str, Any]], upload: bool) -> EncodedBody:
    """
    Serialize ``body`` as JSON, or as multipart form-data when ``upload`` is set.

    File values (binary file objects, ``bytes`` or ``(filename, data[, type])``
    tuples) are only meaningful in upload mode.
    """
    body = body or {}
    if not upload:
        return EncodedBody(
            content=json.dumps(body).encode("utf-8"),
            content_type="application/json",
        )

    content, content_type = encode_multipart_formdata(_form_fields(body))
    return EncodedBody(content=content, content_type=content_type)
