"""
Public, high-level helpers for building a PlugConta client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import PlugContaClient
from .core.config import ClientConfig, ClientParameters, load_client_config

__all__ = ["create_client"]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    credential_id: Optional[str] = None,
    credential_token: Optional[str] = None,
    production: Optional[bool] = None,
    upload: Optional[bool] = None,
    decode: Optional[bool] = None,
    debug: Optional[bool] = None,
    timeout_seconds: Optional[float | int | str] = None,
    production_url: Optional[str] = None,
    staging_url: Optional[str] = None,
    require_credentials: bool = True,
) -> PlugContaClient:
    """
    Construct a :class:`PlugContaClient`.

    Callers either supply a ready-made :class:`ClientConfig` or let the helper
    assemble one from the environment, a ``.env`` file and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            credential_id,
            credential_token,
            production,
            upload,
            decode,
            debug,
            timeout_seconds,
            production_url,
            staging_url,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            credential_id=credential_id,
            credential_token=credential_token,
            production=production,
            upload=upload,
            decode=decode,
            debug=debug,
            timeout_seconds=timeout_seconds,
            production_url=production_url,
            staging_url=staging_url,
        )
    if require_credentials:
        cfg.require_credentials()
    return PlugContaClient(cfg, session=session)
