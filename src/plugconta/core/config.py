"""
Configuration objects and helpers for the PlugConta client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import ConfigError

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "PRODUCTION_URL",
    "STAGING_URL",
    "load_client_config",
]

PRODUCTION_URL = "https://api.pagamentobancario.com.br/api/v1"
STAGING_URL = "https://staging.pagamentobancario.com.br/api/v1"

_PARAMETER_TO_ENV_KEY = {
    "credential_id": "PLUGCONTA_CNPJSH",
    "credential_token": "PLUGCONTA_TOKENSH",
    "production": "PLUGCONTA_PRODUCTION",
    "upload": "PLUGCONTA_UPLOAD",
    "decode": "PLUGCONTA_DECODE",
    "debug": "PLUGCONTA_DEBUG",
    "timeout_seconds": "PLUGCONTA_TIMEOUT_SECONDS",
    "production_url": "PLUGCONTA_PRODUCTION_URL",
    "staging_url": "PLUGCONTA_STAGING_URL",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_bool(raw: Optional[str], field_name: str, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{field_name} must be a boolean flag, got '{raw}'")


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return 30.0
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"PLUGCONTA_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("PLUGCONTA_TIMEOUT_SECONDS must be greater than zero")
    return timeout


def _normalize_url(raw: str, field_name: str) -> str:
    value = raw.strip().rstrip("/")
    if not value.startswith(("https://", "http://")):
        raise ConfigError(f"{field_name} must be an absolute http(s) URL")
    return value


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit keyword bundle for :func:`load_client_config`.
    """

    credential_id: Optional[str] = None
    credential_token: Optional[str] = None
    production: Optional[bool] = None
    upload: Optional[bool] = None
    decode: Optional[bool] = None
    debug: Optional[bool] = None
    timeout_seconds: Optional[float | int | str] = None
    production_url: Optional[str] = None
    staging_url: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


@dataclass(frozen=True)
class ClientConfig:
    """
    Snapshot of everything that shapes a request.

    Instances are immutable; the client swaps in a new snapshot on every
    setter call and derives one-off copies for scoped overrides.
    """

    credential_id: str = ""
    credential_token: str = ""
    production: bool = True
    upload: bool = False
    decode: bool = True
    debug: bool = False
    timeout_seconds: float = 30.0
    production_url: str = PRODUCTION_URL
    staging_url: str = STAGING_URL

    @property
    def base_url(self) -> str:
        return self.production_url if self.production else self.staging_url

    @property
    def content_type(self) -> str:
        return "multipart/form-data" if self.upload else "application/json"

    def require_credentials(self) -> None:
        if not self.credential_id:
            raise ConfigError("PLUGCONTA_CNPJSH must be provided")
        if not self.credential_token:
            raise ConfigError("PLUGCONTA_TOKENSH must be provided")

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        return cls(
            credential_id=values.get("PLUGCONTA_CNPJSH", "").strip(),
            credential_token=values.get("PLUGCONTA_TOKENSH", "").strip(),
            production=_parse_bool(
                values.get("PLUGCONTA_PRODUCTION"), "PLUGCONTA_PRODUCTION", True
            ),
            upload=_parse_bool(values.get("PLUGCONTA_UPLOAD"), "PLUGCONTA_UPLOAD", False),
            decode=_parse_bool(values.get("PLUGCONTA_DECODE"), "PLUGCONTA_DECODE", True),
            debug=_parse_bool(values.get("PLUGCONTA_DEBUG"), "PLUGCONTA_DEBUG", False),
            timeout_seconds=_parse_timeout(values.get("PLUGCONTA_TIMEOUT_SECONDS")),
            production_url=_normalize_url(
                values.get("PLUGCONTA_PRODUCTION_URL", PRODUCTION_URL),
                "PLUGCONTA_PRODUCTION_URL",
            ),
            staging_url=_normalize_url(
                values.get("PLUGCONTA_STAGING_URL", STAGING_URL),
                "PLUGCONTA_STAGING_URL",
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
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
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "credential_id": credential_id,
                "credential_token": credential_token,
                "production": production,
                "upload": upload,
                "decode": decode,
                "debug": debug,
                "timeout_seconds": timeout_seconds,
                "production_url": production_url,
                "staging_url": staging_url,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        try:
            return cls.from_mapping(environment.variables)
        except ConfigError as exc:
            origins = ", ".join(
                f"{key} from {source}" for key, source in sorted(environment.sources.items())
            )
            raise ConfigError(f"{exc} (settings: {origins or 'none'})") from exc


def load_client_config(
    *,
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
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, explicit
    keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
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
