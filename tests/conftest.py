from __future__ import annotations

import pytest
import responses

from plugconta import ClientConfig, PlugContaClient

BASE = "https://api.pagamentobancario.com.br/api/v1"
STAGING = "https://staging.pagamentobancario.com.br/api/v1"


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(credential_id="12345678000199", credential_token="secret-token")


@pytest.fixture()
def client(config: ClientConfig) -> PlugContaClient:
    return PlugContaClient(config)


@pytest.fixture()
def rsps():
    with responses.RequestsMock() as mock:
        yield mock
