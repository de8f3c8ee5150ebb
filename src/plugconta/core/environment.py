"""
Collects the ``PLUGCONTA_*`` settings the client is configured from.

Sources are layered: the process environment (or an explicit ``base``), then a
``.env`` file, then caller overrides. Only keys carrying :data:`ENV_PREFIX`
survive, so unrelated variables (and other services' secrets) never reach
:meth:`plugconta.core.config.ClientConfig.from_mapping`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

__all__ = ["ENV_PREFIX", "ClientEnvironment", "build_environment", "read_env_file"]

ENV_PREFIX = "PLUGCONTA_"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def read_env_file(path: str) -> Dict[str, str]:
    """
    Read the ``PLUGCONTA_*`` entries of a ``.env`` file.

    Accepts ``KEY=VALUE`` lines with an optional ``export`` prefix and optional
    surrounding quotes; ``#`` lines are comments. A missing file yields ``{}``.
    """
    try:
        data = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        logging.debug("No settings file at %s", path)
        return {}

    values: Dict[str, str] = {}
    for raw_line in data.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line.startswith(ENV_PREFIX) or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = _strip_quotes(value.strip())
    return values


def _own_keys(values: Mapping[str, str]) -> Dict[str, str]:
    return {key: value for key, value in values.items() if key.startswith(ENV_PREFIX)}


@dataclass(frozen=True)
class ClientEnvironment:
    """
    Resolved settings plus where each one came from (``env``, ``file``,
    ``override``), for error messages and debugging.
    """

    variables: Mapping[str, str]
    sources: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def source_of(self, key: str) -> Optional[str]:
        return self.sources.get(key)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Merge ``base`` (default :data:`os.environ`), ``env_file`` and ``overrides``.

    File entries never shadow keys already present in ``base``; ``overrides``
    always win. Pass ``env_file=None`` to skip the file. Keys without the
    ``PLUGCONTA_`` prefix are dropped.
    """
    merged = _own_keys(os.environ if base is None else base)
    sources = dict.fromkeys(merged, "env")

    if env_file is not None:
        for key, value in read_env_file(env_file).items():
            if key not in merged:
                merged[key] = value
                sources[key] = "file"

    ignored = sorted(key for key in overrides or {} if not key.startswith(ENV_PREFIX))
    if ignored:
        logging.warning("Ignoring settings without the %s prefix: %s", ENV_PREFIX, ", ".join(ignored))
    for key, value in _own_keys(overrides or {}).items():
        merged[key] = value
        sources[key] = "override"

    return ClientEnvironment(variables=merged, sources=sources)
