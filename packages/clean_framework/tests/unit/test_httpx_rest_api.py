"""Unit tests for the httpx-backed REST client."""

from __future__ import annotations

import json

import httpx
import pytest
from clean_framework.config import RestConfig
from clean_framework.domain.enums import RestMethod, RestResponseType
from clean_framework.domain.exceptions import RestClientError
from clean_framework.infrastructure.rest import HttpxRestApi


def make_api(handler: httpx.MockTransport) -> HttpxRestApi:
    """Build a client talking to a mock transport."""
    client = httpx.AsyncClient(base_url="https://api.example.com", transport=handler)
    return HttpxRestApi(client=client)


class TestHttpxRestApi:
    """Tests for HttpxRestApi."""

    @pytest.mark.asyncio
    async def test_get_success(self) -> None:
        """Test a GET returning JSON."""
        seen: list[httpx.Request] = []

        def respond(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"field": 1})

        async with make_api(httpx.MockTransport(respond)) as api:
            response = await api.request(RestMethod.GET, "items/1", {"id": "1"})

        assert response.type is RestResponseType.SUCCESS
        assert json.loads(response.content) == {"field": 1}
        assert response.path == "items/1"
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "https://api.example.com/items/1"
        assert seen[0].content == b""

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self) -> None:
        """Test that body-carrying verbs send the mapping as JSON."""
        seen: list[httpx.Request] = []

        def respond(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, text="{}")

        async with make_api(httpx.MockTransport(respond)) as api:
            response = await api.request(RestMethod.POST, "items", {"name": "widget"})

        assert response.type is RestResponseType.SUCCESS
        assert json.loads(seen[0].content) == {"name": "widget"}
        assert seen[0].headers["content-type"] == "application/json"

    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (400, RestResponseType.BAD_REQUEST),
            (401, RestResponseType.UNAUTHORIZED),
            (403, RestResponseType.FORBIDDEN),
            (404, RestResponseType.NOT_FOUND),
            (408, RestResponseType.TIMEOUT),
            (409, RestResponseType.CONFLICT),
            (422, RestResponseType.BAD_REQUEST),
            (500, RestResponseType.INTERNAL_SERVER_ERROR),
            (503, RestResponseType.INTERNAL_SERVER_ERROR),
        ],
    )
    @pytest.mark.asyncio
    async def test_status_classification(
        self, status_code: int, expected: RestResponseType
    ) -> None:
        """Test that error statuses are classified and the body kept."""
        transport = httpx.MockTransport(lambda request: httpx.Response(status_code, text="err"))

        async with make_api(transport) as api:
            response = await api.request(RestMethod.DELETE, "items/1")

        assert response.type is expected
        assert response.content == "err"

    @pytest.mark.asyncio
    async def test_transport_failure(self) -> None:
        """Test that connection errors are reported as unknown."""

        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_api(httpx.MockTransport(fail)) as api:
            response = await api.request(RestMethod.GET, "items")

        assert response.type is RestResponseType.UNKNOWN
        assert response.content == ""

    @pytest.mark.asyncio
    async def test_redirect_loop(self) -> None:
        """Test that redirect failures are reported as unknown."""

        def loop(request: httpx.Request) -> httpx.Response:
            raise httpx.TooManyRedirects("loop", request=request)

        async with make_api(httpx.MockTransport(loop)) as api:
            response = await api.request(RestMethod.GET, "items")

        assert response.type is RestResponseType.UNKNOWN
        assert response.content == ""

    @pytest.mark.asyncio
    async def test_undecodable_body(self) -> None:
        """Test that a body failing content decoding is reported as unknown."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                200, headers={"content-encoding": "gzip"}, content=b"not gzip"
            )
        )

        async with make_api(transport) as api:
            response = await api.request(RestMethod.GET, "items")

        assert response.type is RestResponseType.UNKNOWN
        assert response.content == ""

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test that client-side timeouts are reported as timeouts."""

        def slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with make_api(httpx.MockTransport(slow)) as api:
            response = await api.request(RestMethod.GET, "items")

        assert response.type is RestResponseType.TIMEOUT

    @pytest.mark.asyncio
    async def test_request_after_close(self) -> None:
        """Test that a closed client refuses requests."""
        api = make_api(httpx.MockTransport(lambda request: httpx.Response(200)))
        await api.aclose()
        await api.aclose()

        assert api.is_closed is True
        with pytest.raises(RestClientError):
            await api.request(RestMethod.GET, "items")

    @pytest.mark.asyncio
    async def test_from_config(self) -> None:
        """Test building a client from configuration."""
        config = RestConfig(base_url="https://config.example.com", timeout=2.5)

        async with HttpxRestApi.from_config(config) as api:
            assert api._client.base_url.host == "config.example.com"
            assert api._client.timeout.read == 2.5
            assert api._client.headers["accept"] == "application/json"


class TestStatusCodeClassification:
    """Tests for RestResponseType helpers."""

    def test_success_range(self) -> None:
        """Test that every 2xx code is a success."""
        assert RestResponseType.from_status_code(200) is RestResponseType.SUCCESS
        assert RestResponseType.from_status_code(204) is RestResponseType.SUCCESS

    def test_outside_known_ranges(self) -> None:
        """Test informational and redirect codes."""
        assert RestResponseType.from_status_code(302) is RestResponseType.UNKNOWN
        assert RestResponseType.from_status_code(101) is RestResponseType.UNKNOWN

    def test_predicates(self) -> None:
        """Test client and server error predicates."""
        assert RestResponseType.NOT_FOUND.is_client_error
        assert RestResponseType.TIMEOUT.is_client_error
        assert not RestResponseType.NOT_FOUND.is_server_error
        assert RestResponseType.INTERNAL_SERVER_ERROR.is_server_error
        assert not RestResponseType.SUCCESS.is_client_error
        assert not RestResponseType.UNKNOWN.is_server_error
