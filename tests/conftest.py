"""Shared test fixtures for infinispan-rest.

Provides output-state isolation, an isolated XDG config environment, and an
in-memory fake Infinispan server exposed as an :class:`httpx.MockTransport`
so client and CLI tests exercise the real wire format without a network.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, unquote

import httpx
import pytest

from infinispan_rest.auth import basic_auth_header
from infinispan_rest.output import OutputFormat, OutputManager, reset_output, set_output

BASE_URL = "http://localhost:11222"
USERNAME = "username"
PASSWORD = "password"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches sys.stdout/sys.stderr at creation time; CliRunner
    swaps those streams, so a stale manager would write to closed files.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories at tmp_path and clear ISPN_* variables."""
    monkeypatch.setattr("infinispan_rest.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["ISPN_PROFILE", "ISPN_BASE_URL", "ISPN_USERNAME", "ISPN_PASSWORD"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Fake server
# ---------------------------------------------------------------------------


class FakeInfinispan:
    """Just enough of the Infinispan REST API to test against.

    Every received :class:`httpx.Request` is appended to :attr:`requests`.
    Requests without the expected Basic credentials get a 401.
    """

    def __init__(self, username: str = USERNAME, password: str = PASSWORD) -> None:
        self.authorization = basic_auth_header(username, password)
        self.caches: dict[str, dict[str, str]] = {}
        self.cache_configs: dict[str, Any] = {}
        self.ttls: dict[tuple[str, str], str] = {}
        self.counters: dict[str, int] = {}
        self.counter_configs: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("Authorization") != self.authorization:
            return httpx.Response(401)

        raw_path, _, query = request.url.raw_path.decode("ascii").partition("?")
        segments = [unquote(s) for s in raw_path.split("/")[3:]]
        params = dict(parse_qsl(query))

        resource, names = segments[0], segments[1:]
        if resource == "caches":
            return self._caches(request, names, params)
        if resource == "counters":
            return self._counters(request, names, params)
        return httpx.Response(404)

    # -- caches ----------------------------------------------------------

    def _caches(self, request: httpx.Request, names: list[str], params: dict[str, str]) -> httpx.Response:
        method = request.method
        if not names:
            return httpx.Response(200, json=sorted(self.caches))

        cache = names[0]
        if len(names) == 2:
            return self._entries(request, cache, names[1])

        action = params.get("action")
        if method == "POST" and action is None:
            if cache in self.caches:
                return httpx.Response(409)
            self.caches[cache] = {}
            self.cache_configs[cache] = json.loads(request.content)
            return httpx.Response(200)

        if cache not in self.caches:
            return httpx.Response(404)

        if method == "DELETE":
            del self.caches[cache]
            return httpx.Response(200)
        if action == "clear":
            self.caches[cache].clear()
            return httpx.Response(204)
        if action == "size":
            return httpx.Response(200, text=str(len(self.caches[cache])))
        if action == "keys":
            return httpx.Response(200, json=sorted(self.caches[cache]))
        if action == "config":
            return httpx.Response(200, json=self.cache_configs[cache])
        if action == "stats":
            return httpx.Response(200, json={"current_number_of_entries": len(self.caches[cache])})
        if action is None:
            return httpx.Response(200)
        return httpx.Response(400)

    def _entries(self, request: httpx.Request, cache: str, key: str) -> httpx.Response:
        if cache not in self.caches:
            return httpx.Response(404)
        entries = self.caches[cache]
        method = request.method

        if method == "POST":
            if key in entries:
                return httpx.Response(409)
            entries[key] = request.content.decode("utf-8")
            ttl = request.headers.get("timeToLiveSeconds")
            if ttl is not None:
                self.ttls[(cache, key)] = ttl
            return httpx.Response(204)
        if key not in entries:
            return httpx.Response(404)
        if method == "PUT":
            entries[key] = request.content.decode("utf-8")
            return httpx.Response(204)
        if method == "DELETE":
            del entries[key]
            return httpx.Response(204)
        if method == "HEAD":
            return httpx.Response(200)
        return httpx.Response(200, text=entries[key])

    # -- counters --------------------------------------------------------

    def _counters(self, request: httpx.Request, names: list[str], params: dict[str, str]) -> httpx.Response:
        method = request.method
        if not names:
            return httpx.Response(200, json=sorted(self.counters))

        name = names[0]
        action = params.get("action")
        if method == "POST" and action is None:
            if name in self.counters:
                return httpx.Response(409)
            config = json.loads(request.content)
            (counter_config,) = config.values()
            self.counters[name] = counter_config.get("initial-value", 0)
            self.counter_configs[name] = config
            return httpx.Response(200)

        if name not in self.counters:
            return httpx.Response(404)

        if len(names) == 2 and names[1] == "config":
            return httpx.Response(200, json=self.counter_configs[name])
        if method == "GET":
            return httpx.Response(200, text=str(self.counters[name]))
        if method == "DELETE":
            del self.counters[name]
            self.counter_configs.pop(name, None)
            return httpx.Response(200)

        previous = self.counters[name]
        if action == "increment":
            self.counters[name] += 1
        elif action == "decrement":
            self.counters[name] -= 1
        elif action == "add":
            self.counters[name] += int(params["delta"])
        elif action == "reset":
            (counter_config,) = self.counter_configs[name].values()
            self.counters[name] = counter_config.get("initial-value", 0)
            return httpx.Response(204)
        elif action in ("compareAndSet", "compareAndSwap"):
            if previous == int(params["expect"]):
                self.counters[name] = int(params["update"])
            if action == "compareAndSet":
                return httpx.Response(200, text=str(previous == int(params["expect"])).lower())
            return httpx.Response(200, text=str(previous))
        else:
            return httpx.Response(400)
        return httpx.Response(200, text=str(self.counters[name]))


@pytest.fixture
def fake_server() -> FakeInfinispan:
    return FakeInfinispan()


@pytest.fixture
def client(fake_server: FakeInfinispan):
    """A blocking client wired to :func:`fake_server`."""
    from infinispan_rest import Infinispan

    with Infinispan(BASE_URL, USERNAME, PASSWORD, transport=fake_server.transport) as c:
        yield c
