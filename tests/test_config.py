from __future__ import annotations

import pytest

from plugconta import (
    ClientConfig,
    ClientParameters,
    ConfigError,
    PRODUCTION_URL,
    STAGING_URL,
    create_client,
    load_client_config,
)
from plugconta.core.environment import build_environment, read_env_file


def test_defaults():
    config = load_client_config(env_file=None, base={})
    assert config == ClientConfig()
    assert config.production is True
    assert config.decode is True
    assert config.upload is False
    assert config.debug is False
    assert config.base_url == PRODUCTION_URL


def test_env_file_and_overrides_are_layered(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# credentials\n"
        "export PLUGCONTA_CNPJSH=111\n"
        "PLUGCONTA_TOKENSH='from-file'\n"
        "PLUGCONTA_PRODUCTION=no\n"
        "PLUGCONTA_DEBUG=on\n"
    )
    config = load_client_config(
        env_file=str(env_file),
        base={"PLUGCONTA_CNPJSH": "222"},
        overrides={"PLUGCONTA_TIMEOUT_SECONDS": "5"},
        credential_token="explicit",
    )
    assert config.credential_id == "222"
    assert config.credential_token == "explicit"
    assert config.production is False
    assert config.base_url == STAGING_URL
    assert config.debug is True
    assert config.timeout_seconds == 5.0


def test_parameters_bundle():
    config = load_client_config(
        env_file=None,
        base={},
        parameters=ClientParameters(credential_id="1", decode=False, staging_url="https://sandbox.local/api/"),
    )
    assert config.credential_id == "1"
    assert config.decode is False
    assert config.staging_url == "https://sandbox.local/api"


@pytest.mark.parametrize(
    "values",
    [
        {"PLUGCONTA_UPLOAD": "maybe"},
        {"PLUGCONTA_TIMEOUT_SECONDS": "soon"},
        {"PLUGCONTA_TIMEOUT_SECONDS": "0"},
        {"PLUGCONTA_PRODUCTION_URL": "api.example.com"},
    ],
)
def test_invalid_values_raise_config_error(values):
    with pytest.raises(ConfigError):
        ClientConfig.from_mapping(values)


def test_missing_env_file_is_ignored(tmp_path):
    environment = build_environment(
        env_file=str(tmp_path / "missing.env"), base={"PLUGCONTA_CNPJSH": "1"}
    )
    assert dict(environment.variables) == {"PLUGCONTA_CNPJSH": "1"}
    assert environment.source_of("PLUGCONTA_CNPJSH") == "env"


def test_only_prefixed_keys_are_collected(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text('DATABASE_URL=postgres://x\nPLUGCONTA_TOKENSH="quoted value"\n')
    environment = build_environment(
        env_file=str(env_file),
        base={"HOME": "/root", "PLUGCONTA_CNPJSH": "1"},
        overrides={"AWS_SECRET": "s", "PLUGCONTA_DEBUG": "true"},
    )
    assert dict(environment.variables) == {
        "PLUGCONTA_CNPJSH": "1",
        "PLUGCONTA_TOKENSH": "quoted value",
        "PLUGCONTA_DEBUG": "true",
    }
    assert environment.sources == {
        "PLUGCONTA_CNPJSH": "env",
        "PLUGCONTA_TOKENSH": "file",
        "PLUGCONTA_DEBUG": "override",
    }


def test_read_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nexport PLUGCONTA_CNPJSH='1'\nOTHER=2\nPLUGCONTA_BROKEN\n")
    assert read_env_file(str(env_file)) == {"PLUGCONTA_CNPJSH": "1"}


def test_config_error_names_setting_sources():
    with pytest.raises(ConfigError, match="PLUGCONTA_UPLOAD from override"):
        load_client_config(env_file=None, base={}, overrides={"PLUGCONTA_UPLOAD": "maybe"})


def test_create_client_rejects_config_and_parameters():
    with pytest.raises(ValueError):
        create_client(config=ClientConfig(), credential_id="1")


def test_create_client_requires_credentials():
    with pytest.raises(ConfigError):
        create_client(env_file=None, base={})


def test_create_client_from_parameters():
    client = create_client(
        env_file=None, base={}, credential_id="1", credential_token="t", production=False
    )
    assert client.production is False
    assert client.credential_id == "1"
