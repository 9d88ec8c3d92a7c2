"""Tests for the blocking Infinispan client against the in-memory fake server."""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from conftest import BASE_URL, PASSWORD, USERNAME, FakeInfinispan
from infinispan_rest import Infinispan
from infinispan_rest.client.response import counter_value, name_list
from infinispan_rest.exceptions import ConfigError, ConnectionError_
from infinispan_rest.models import AuthConfig, Profile, RequestConfig
from infinispan_rest.output import OutputFormat, OutputManager, set_output
from infinispan_rest.request import caches, counters, entries
from infinispan_rest.request.base import HTTPMethod, Request


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _raising_transport(exc: Exception) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return httpx.MockTransport(handler)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_authorization_precomputed(self) -> None:
        with Infinispan(BASE_URL, "u", "p") as client:
            assert client.authorization == "Basic dTpw"
            assert client.base_url == BASE_URL

    def test_from_profile(self, fake_server: FakeInfinispan) -> None:
        profile = Profile(
            name="local",
            base_url=BASE_URL,
            auth=AuthConfig(username=USERNAME, source=f"literal:{PASSWORD}"),
            request=RequestConfig(timeout=5),
        )
        with Infinispan.from_profile(profile, transport=fake_server.transport) as client:
            assert client.run(caches.list()).status_code == 200

    def test_from_profile_without_auth(self) -> None:
        with pytest.raises(ConfigError, match="no credentials"):
            Infinispan.from_profile(Profile(name="anon"))


# ---------------------------------------------------------------------------
# Caches
# ---------------------------------------------------------------------------


class TestCaches:
    def test_create_then_exists(self, client: Infinispan, fake_server: FakeInfinispan) -> None:
        assert client.run(caches.create_local("books")).status_code == 200
        assert client.run(caches.exists("books")).status_code == 200
        assert "local-cache" in fake_server.cache_configs["books"]

    def test_missing_cache_is_not_an_exception(self, client: Infinispan) -> None:
        assert client.run(caches.exists("nope")).status_code == 404

    def test_delete(self, client: Infinispan) -> None:
        client.run(caches.create_local("books"))
        assert client.run(caches.delete("books")).status_code == 200
        assert client.run(caches.exists("books")).status_code == 404

    def test_list(self, client: Infinispan) -> None:
        client.run(caches.create_local("b"))
        client.run(caches.create_distributed_async("a"))
        assert name_list(client.run(caches.list())) == ["a", "b"]

    def test_size_keys_clear(self, client: Infinispan) -> None:
        client.run(caches.create_local("c"))
        client.run(entries.create("c", "k1").with_value("v1"))
        client.run(entries.create("c", "k2").with_value("v2"))

        assert client.run(caches.size("c")).text == "2"
        assert client.run(caches.keys("c")).json() == ["k1", "k2"]
        assert client.run(caches.clear("c")).status_code == 204
        assert client.run(caches.size("c")).text == "0"

    def test_config_round_trip(self, client: Infinispan) -> None:
        client.run(caches.create_replicated_sync("r"))
        config = client.run(caches.get_config("r")).json()
        assert config["replicated-cache"]["remote-timeout"] == 17500

    def test_encoded_name_reaches_server(self, client: Infinispan, fake_server: FakeInfinispan) -> None:
        client.run(caches.create_local("a/b c"))
        assert "a/b c" in fake_server.caches
        assert fake_server.last_request.url.raw_path == b"/rest/v2/caches/a%2Fb%20c"


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


class TestEntries:
    @pytest.fixture(autouse=True)
    def _cache(self, client: Infinispan) -> None:
        client.run(caches.create_local("sessions"))

    def test_create_and_get(self, client: Infinispan) -> None:
        client.run(entries.create("sessions", "abc").with_value("hello"))
        response = client.run(entries.get("sessions", "abc"))
        assert response.status_code == 200
        assert response.text == "hello"

    def test_ttl_header(self, client: Infinispan, fake_server: FakeInfinispan) -> None:
        client.run(entries.create("sessions", "abc").with_ttl(timedelta(seconds=5)))
        assert fake_server.ttls[("sessions", "abc")] == "5"
        assert fake_server.last_request.headers["timeToLiveSeconds"] == "5"

    def test_update_and_delete(self, client: Infinispan) -> None:
        client.run(entries.create("sessions", "k").with_value("old"))
        client.run(entries.update("sessions", "k", "new"))
        assert client.run(entries.get("sessions", "k")).text == "new"

        assert client.run(entries.delete("sessions", "k")).status_code == 204
        assert client.run(entries.exists("sessions", "k")).status_code == 404

    def test_duplicate_create_conflicts(self, client: Infinispan) -> None:
        client.run(entries.create("sessions", "k"))
        assert client.run(entries.create("sessions", "k")).status_code == 409


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------


class TestCounters:
    def test_create_and_read(self, client: Infinispan) -> None:
        client.run(counters.create_weak("hits").with_value(10))
        assert counter_value(client.run(counters.get("hits"))) == 10

    def test_increment_decrement(self, client: Infinispan) -> None:
        client.run(counters.create_strong("c"))
        client.run(counters.increment("c"))
        client.run(counters.increment("c").by(5))
        client.run(counters.decrement("c"))
        assert counter_value(client.run(counters.get("c"))) == 5

    def test_reset_restores_initial_value(self, client: Infinispan) -> None:
        client.run(counters.create_strong("c").with_value(3))
        client.run(counters.increment("c").by(10))
        assert client.run(counters.reset("c")).status_code == 204
        assert counter_value(client.run(counters.get("c"))) == 3

    def test_compare_and_set(self, client: Infinispan) -> None:
        client.run(counters.create_strong("c").with_value(1))
        assert client.run(counters.compare_and_set("c", 1, 2)).text == "true"
        assert client.run(counters.compare_and_set("c", 1, 3)).text == "false"
        assert counter_value(client.run(counters.get("c"))) == 2

    def test_compare_and_swap_returns_previous(self, client: Infinispan) -> None:
        client.run(counters.create_strong("c").with_value(7))
        assert client.run(counters.compare_and_swap("c", 7, 8)).text == "7"
        assert counter_value(client.run(counters.get("c"))) == 8

    def test_config_and_list(self, client: Infinispan) -> None:
        client.run(counters.create_weak("b"))
        client.run(counters.create_strong("a").with_value(2))
        assert client.run(counters.get_config("a")).json() == {"strong-counter": {"initial-value": 2}}
        assert name_list(client.run(counters.list())) == ["a", "b"]

    def test_delete(self, client: Infinispan) -> None:
        client.run(counters.create_weak("c"))
        client.run(counters.delete("c"))
        assert client.run(counters.get("c")).status_code == 404


# ---------------------------------------------------------------------------
# Wire behaviour
# ---------------------------------------------------------------------------


class TestWire:
    def test_every_request_carries_same_headers(
        self, client: Infinispan, fake_server: FakeInfinispan
    ) -> None:
        client.run(caches.list())
        client.run(counters.list())
        client.run(caches.exists("x"))

        auth_values = {r.headers["Authorization"] for r in fake_server.requests}
        content_types = {r.headers["Content-Type"] for r in fake_server.requests}
        assert auth_values == {client.authorization}
        assert content_types == {"application/json"}

    def test_wrong_credentials_return_401(self, fake_server: FakeInfinispan) -> None:
        with Infinispan(BASE_URL, USERNAME, "wrong", transport=fake_server.transport) as client:
            assert client.run(caches.list()).status_code == 401

    def test_plain_request_value(self, client: Infinispan, fake_server: FakeInfinispan) -> None:
        response = client.run(Request(method=HTTPMethod.GET, path_and_query="/rest/v2/counters"))
        assert response.status_code == 200
        assert fake_server.last_request.method == "GET"

    def test_server_error_is_returned(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
        with Infinispan(BASE_URL, "u", "p", transport=transport) as client:
            response = client.run(caches.list())
        assert response.status_code == 500
        assert response.text == "boom"

    def test_clients_are_independent(self, fake_server: FakeInfinispan) -> None:
        other = FakeInfinispan()
        with Infinispan(BASE_URL, USERNAME, PASSWORD, transport=fake_server.transport) as a, \
                Infinispan(BASE_URL, USERNAME, PASSWORD, transport=other.transport) as b:
            a.run(caches.create_local("only-a"))
            assert b.run(caches.exists("only-a")).status_code == 404
        assert len(other.requests) == 1

    def test_debug_trace(self, client: Infinispan, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        client.run(caches.size("a b"))
        assert "[debug] GET /rest/v2/caches/a%20b?action=size -> 404" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestConnectionErrors:
    def test_connect_error(self) -> None:
        transport = _raising_transport(httpx.ConnectError("Connection refused"))
        with Infinispan(BASE_URL, "u", "p", transport=transport) as client:
            with pytest.raises(ConnectionError_, match="Error while sending the request to Infinispan"):
                client.run(caches.list())

    def test_timeout(self) -> None:
        transport = _raising_transport(httpx.ReadTimeout("timed out"))
        with Infinispan(BASE_URL, "u", "p", transport=transport) as client:
            with pytest.raises(ConnectionError_) as exc_info:
                client.run(counters.get("c"))
        assert exc_info.value.exit_code == 6
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_invalid_base_url(self, fake_server: FakeInfinispan) -> None:
        with Infinispan("http://localhost:notaport", "u", "p", transport=fake_server.transport) as client:
            with pytest.raises(ConnectionError_):
                client.run(caches.list())
        assert fake_server.requests == []

    def test_undecodable_body(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"
            )
        )
        with Infinispan(BASE_URL, "u", "p", transport=transport) as client:
            with pytest.raises(ConnectionError_) as exc_info:
                client.run(caches.list())
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    def test_redirect_loop(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(302, headers={"Location": str(request.url)})
        )
        with Infinispan(BASE_URL, "u", "p", transport=transport) as client:
            client._client.follow_redirects = True
            with pytest.raises(ConnectionError_) as exc_info:
                client.run(caches.list())
        assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)
