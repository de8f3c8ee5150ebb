from __future__ import annotations

import requests

from plugconta.core.config import ClientConfig
from plugconta.core.executor import combine_headers, execute
from plugconta.core.request import build_request


class RecordingSession:
    def __init__(self, status: int = 200, content: bytes = b"{}") -> None:
        self.status = status
        self.content = content
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = requests.Response()
        response.status_code = self.status
        response._content = self.content
        response.url = url
        return response


def test_combine_headers_keeps_first_spelling_and_order():
    assert combine_headers([("X-A", "1"), ("b", "2"), ("x-a", "3")]) == {
        "X-A": "1, 3",
        "b": "2",
    }


def test_config_timeout_is_used_by_default():
    session = RecordingSession()
    config = ClientConfig(timeout_seconds=12.5)
    execute(session, build_request("GET", "payer", config), config)
    assert session.calls[0][2]["timeout"] == 12.5


def test_explicit_timeout_wins():
    session = RecordingSession()
    config = ClientConfig()
    execute(session, build_request("GET", "payer", config), config, timeout=2)
    assert session.calls[0][2]["timeout"] == 2


def test_body_is_sent_as_data():
    session = RecordingSession(status=201)
    config = ClientConfig()
    result = execute(session, build_request("POST", "payer", config, body={"a": 1}), config)
    assert session.calls[0][2]["data"] == b'{"a": 1}'
    assert result.status_code == 201
    assert result.body == {}


def test_error_status_is_decoded_even_when_decode_is_off():
    session = RecordingSession(status=400, content=b'{"message": "bad"}')
    config = ClientConfig(decode=False)
    result = execute(session, build_request("GET", "payer", config), config)
    assert result.body == {"message": "bad"}
    assert not result.ok


def test_invalid_json_decodes_to_none():
    session = RecordingSession(status=200, content=b"not json")
    config = ClientConfig()
    assert execute(session, build_request("GET", "payer", config), config).body is None


def test_debug_diagnostics_without_prepared_request():
    session = RecordingSession()
    config = ClientConfig(debug=True)
    result = execute(session, build_request("GET", "payer", config), config)
    assert result.diagnostics["method"] is None
    assert result.diagnostics["elapsed_seconds"] == 0.0
