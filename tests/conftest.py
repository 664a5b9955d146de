"""
Shared test fixtures for weeek-cli tests.
Provides a scripted fake transport and keeps real .env / WEEEK_* values out.
"""

import pytest

from weeek_cli.client import WeeekClient
from weeek_cli.config import ClientConfig


class FakeTransport:
    """Records every request and answers from a routing table.

    Routes are keyed by (METHOD, path) or (METHOD, path, frozenset(params)).
    A route value may be a response, an exception instance (raised), or a
    list consumed one item per call.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def add(self, method, path, response, params=None):
        key = (method, path) if params is None else (method, path, frozenset(params.items()))
        self.routes[key] = response

    def _lookup(self, method, path, params):
        if params:
            key = (method, path, frozenset(params.items()))
            if key in self.routes:
                return key
        key = (method, path)
        if key in self.routes:
            return key
        raise AssertionError(f"Unexpected request: {method} {path} {params}")

    async def request(self, method, path, body=None, params=None, *, files=None):
        self.calls.append(
            {"method": method, "path": path, "body": body, "params": params, "files": files}
        )
        key = self._lookup(method, path, params)
        response = self.routes[key]
        if isinstance(response, list) and response and isinstance(response[0], _Seq):
            response = response.pop(0).value
        if isinstance(response, Exception):
            raise response
        return response

    def calls_for(self, method, path=None):
        return [
            c for c in self.calls if c["method"] == method and (path is None or c["path"] == path)
        ]


class _Seq:
    def __init__(self, value):
        self.value = value


def seq(*values):
    """Route value answering successive calls with successive values."""
    return [_Seq(v) for v in values]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Every test runs without WEEEK_* env vars and outside any real .env."""
    for key in (
        "WEEEK_API_KEY",
        "WEEEK_API_URL",
        "WEEEK_HTTP_TIMEOUT_SECONDS",
        "WEEEK_HTTP_MAX_RESPONSE_BYTES",
        "WEEEK_HTTP_LOG",
        "WEEEK_HTTP_LOG_SAMPLE_RATE",
        "WEEEK_SPEC_PATH",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config():
    return ClientConfig(api_key="test-key", api_url="https://weeek.test/v1")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(config, transport):
    return WeeekClient(config, transport=transport)
