"""Tests for the request dispatcher: auth, decoding, errors, rate limits, events."""

from __future__ import annotations

import logging

import httpx
import pytest

from fapi import (
    AsyncClient,
    BodyWithHeaders,
    Client,
    FapiError,
    HttpMethod,
    RatelimitError,
    Request,
    ReturnMethod,
)
from fapi.client import USER_AGENT, normalize_auth
from fapi.config import settings
from fapi.request_context import get_request_id

BASE = "http://test"

PNG_SIGNATURE = bytes([0x89, 0x50, 0x4E, 0x47])

_RATE_HEADERS = {
    "x-rate-limit-limit": "60",
    "x-rate-limit-remaining": "59",
    "x-rate-limit-reset": "42",
}


def _get(path: str = "/thing", return_type: ReturnMethod = ReturnMethod.BODY, **kwargs) -> Request:
    return Request(method=HttpMethod.GET, path=path, return_type=return_type, **kwargs)


def _post(path: str = "/thing", body=None, **kwargs) -> Request:
    return Request(method=HttpMethod.POST, path=path, body=body, **kwargs)


# ---------------------------------------------------------------------------
# Authorization and default headers
# ---------------------------------------------------------------------------


class TestAuth:
    def test_prefix_added(self):
        assert normalize_auth("abc123") == "Bearer abc123"

    def test_prefixed_token_unchanged(self):
        assert normalize_auth("Bearer abc123") == "Bearer abc123"

    def test_empty_token(self):
        assert normalize_auth("") == ""
        assert normalize_auth(None) == ""

    def test_authorization_header_sent(self, make_client):
        c, rec = make_client(lambda req: httpx.Response(200), auth="abc123")
        with c:
            c.request(_get())
        assert rec.last.headers["authorization"] == "Bearer abc123"

    def test_prefixed_authorization_passed_through(self, make_client):
        c, rec = make_client(lambda req: httpx.Response(200), auth="Bearer abc123")
        with c:
            c.request(_get())
        assert rec.last.headers["authorization"] == "Bearer abc123"

    def test_no_auth_sends_no_header(self, make_client, monkeypatch):
        monkeypatch.setattr(settings, "auth", "")
        c, rec = make_client(lambda req: httpx.Response(200), auth=None)
        with c:
            c.request(_get())
        assert "authorization" not in rec.last.headers

    def test_user_agent(self, client, recorder):
        client.request(_get())
        ua = recorder.last.headers["user-agent"]
        assert ua == USER_AGENT
        assert ua.startswith("fAPIClient v")


class TestContentType:
    def test_post_with_body_defaults_to_json(self, client, recorder):
        client.request(_post(body={"images": ["u"]}))
        assert recorder.last.headers["content-type"] == "application/json"
        assert recorder.last_json() == {"images": ["u"]}

    def test_declared_content_type(self, client, recorder):
        client.request(_post(body=b"raw bytes", content_type="text/plain"))
        assert recorder.last.headers["content-type"] == "text/plain"
        assert recorder.last.content == b"raw bytes"

    def test_get_has_no_content_type(self, client, recorder):
        client.request(_get())
        assert "content-type" not in recorder.last.headers

    def test_query_params(self, client, recorder):
        client.request(_post(body={}, query={"url": "https://x.y", "json": True}))
        assert recorder.last.url.params["url"] == "https://x.y"
        assert recorder.last.url.params["json"] == "true"

    def test_absolute_url_overrides_path(self, client, recorder):
        client.request(Request(method=HttpMethod.GET, url="http://other/landing"))
        assert recorder.last.url.host == "other"
        assert recorder.last.url.path == "/landing"


# ---------------------------------------------------------------------------
# Response decoding
# ---------------------------------------------------------------------------


class TestDecoding:
    def test_raw_bytes_scenario(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(200, content=PNG_SIGNATURE))
        with c:
            assert c.request(_get("/fixed")) == PNG_SIGNATURE

    def test_json(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(200, json={"results": []}))
        with c:
            assert c.request(_get(return_type=ReturnMethod.JSON)) == {"results": []}

    def test_invalid_json_falls_back_to_raw_body(self, make_client, caplog):
        c, _ = make_client(lambda req: httpx.Response(200, content=b"<html>not json"))
        with c, caplog.at_level(logging.DEBUG, logger="fapi"):
            result = c.request(_get(return_type=ReturnMethod.JSON))
        assert result == b"<html>not json"
        assert "not valid JSON" in caplog.text

    def test_text(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(200, text="https://short.url/x"))
        with c:
            assert c.request(_get(return_type=ReturnMethod.TEXT)) == "https://short.url/x"

    def test_return_headers(self, make_client):
        c, _ = make_client(
            lambda req: httpx.Response(200, content=b"img", headers={"content-type": "image/gif"})
        )
        with c:
            result = c.request(_get(return_headers=True))
        assert isinstance(result, BodyWithHeaders)
        assert result.body == b"img"
        assert result.headers["content-type"] == "image/gif"


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


class TestErrors:
    def test_429_raises_ratelimit_error(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(429, headers={"x-rate-limit-reset": "17"}))
        with c:
            with pytest.raises(RatelimitError) as exc_info:
                c.request(_get())
        err = exc_info.value
        assert err.ratelimit_reset == 17
        assert err.status_code == 429
        assert err.message == "Too Many Requests"
        assert err.request.path == "/thing"

    @pytest.mark.parametrize("headers", [{}, {"x-rate-limit-reset": "soon"}])
    def test_429_unparseable_reset_is_zero(self, make_client, headers):
        c, _ = make_client(lambda req: httpx.Response(429, headers=headers))
        with c:
            with pytest.raises(RatelimitError) as exc_info:
                c.request(_get())
        assert exc_info.value.ratelimit_reset == 0

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("17", 17), ("17.5", 17), (" 17 ", 17), ("30s", 30), ("-1", -1)],
    )
    def test_429_reset_uses_leading_integer(self, make_client, raw, expected):
        c, _ = make_client(lambda req: httpx.Response(429, headers={"x-rate-limit-reset": raw}))
        with c:
            with pytest.raises(RatelimitError) as exc_info:
                c.request(_get())
            assert c.ratelimits.reset == expected
        assert exc_info.value.ratelimit_reset == expected

    def test_500_raises_fapi_error(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(500, text="internal error"))
        with c:
            with pytest.raises(FapiError) as exc_info:
                c.request(_get())
        err = exc_info.value
        assert type(err) is FapiError
        assert err.message == "internal error"
        assert str(err) == "internal error"
        assert err.status_code == 500

    @pytest.mark.parametrize("status", [201, 204, 301, 400, 401, 404, 503])
    def test_any_non_200_is_failure(self, make_client, status):
        c, _ = make_client(lambda req: httpx.Response(status, text="nope"))
        with c:
            with pytest.raises(FapiError) as exc_info:
                c.request(_get())
        assert exc_info.value.status_code == status

    def test_timeout_propagates_unwrapped(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        c, _ = make_client(handler)
        with c:
            with pytest.raises(httpx.TimeoutException):
                c.request(_get())

    def test_ratelimit_is_logged(self, make_client, caplog):
        c, _ = make_client(lambda req: httpx.Response(429, headers={"x-rate-limit-reset": "5"}))
        with c, caplog.at_level(logging.WARNING, logger="fapi"):
            with pytest.raises(RatelimitError):
                c.request(_get())
        assert "Rate limited" in caplog.text


# ---------------------------------------------------------------------------
# Rate-limit tracking
# ---------------------------------------------------------------------------


class TestRatelimitTracking:
    def test_state_from_success(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(200, headers=_RATE_HEADERS))
        with c:
            assert c.ratelimits.limit is None
            c.request(_get())
            assert c.ratelimits.limit == 60
            assert c.ratelimits.remaining == 59
            assert c.ratelimits.reset == 42

    def test_state_updated_before_error(self, make_client):
        headers = {"x-rate-limit-remaining": "0", "x-rate-limit-reset": "30"}
        c, _ = make_client(lambda req: httpx.Response(429, headers=headers))
        with c:
            with pytest.raises(RatelimitError):
                c.request(_get())
            assert c.ratelimits.remaining == 0
            assert c.ratelimits.reset == 30

    def test_remaining_never_inferred(self, make_client):
        responses = iter([
            httpx.Response(200, headers={"x-rate-limit-limit": "60"}),
            httpx.Response(200),
            httpx.Response(200, headers={"x-rate-limit-remaining": "7"}),
        ])
        c, _ = make_client(lambda req: next(responses))
        with c:
            c.request(_get())
            assert c.ratelimits.remaining is None
            c.request(_get())
            assert c.ratelimits.remaining is None
            c.request(_get())
            assert c.ratelimits.remaining == 7
            assert c.ratelimits.limit == 60

    def test_snapshot_is_detached(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(200, headers=_RATE_HEADERS))
        with c:
            before = c.ratelimits
            c.request(_get())
        assert before.limit is None


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestConfiguration:
    def test_defaults_from_settings(self):
        c = Client()
        try:
            assert c.base_url == settings.base_url
            assert c.timeout == settings.timeout
        finally:
            c.close()

    def test_default_timeout_is_15s(self):
        assert settings.timeout == 15000

    def test_zero_timeout_uses_default(self):
        with Client("http://test", timeout=0) as c:
            assert c.timeout == settings.timeout

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValueError):
            Client("http://test", timeout=-5)

    @pytest.mark.parametrize("value", [0, -1])
    def test_timeout_setter_rejects_non_positive(self, client, value):
        with pytest.raises(ValueError):
            client.timeout = value
        assert client.timeout == settings.timeout

    def test_timeout_applied_per_request(self, client, recorder):
        client.timeout = 500
        client.request(_get())
        assert client.timeout == 500
        assert recorder.last.extensions["timeout"]["read"] == 0.5

    def test_context_manager_closes(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(200))
        with c:
            c.request(_get())
        assert c._client.is_closed


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEvents:
    def test_success_emits_request_then_response(self, client):
        seen = []
        client.on("request", lambda e: seen.append(("request", e.request.path)))
        client.on("response", lambda e: seen.append(("response", e.response.status_code)))
        client.on("ratelimit", lambda e: seen.append(("ratelimit", None)))
        client.request(_get())
        assert seen == [("request", "/thing"), ("response", 200)]

    def test_failure_still_emits_response(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(404, text="missing"))
        seen = []
        c.on("response", lambda e: seen.append(e.response.status_code))
        with c:
            with pytest.raises(FapiError):
                c.request(_get())
        assert seen == [404]

    def test_ratelimit_replaces_response_event(self, make_client):
        c, _ = make_client(lambda req: httpx.Response(429, headers={"x-rate-limit-reset": "9"}))
        seen = []
        c.on("response", lambda e: seen.append("response"))
        c.on("ratelimit", lambda e: seen.append(("ratelimit", e.ratelimit_reset, e.request.path)))
        with c:
            with pytest.raises(RatelimitError):
                c.request(_get())
        assert seen == [("ratelimit", 9, "/thing")]

    def test_failing_listener_does_not_alter_outcome(self, client):
        def boom(event):
            raise RuntimeError("listener bug")

        client.on("request", boom).on("response", boom)
        assert client.request(_get()) == b"ok"

    def test_request_id_bound_during_dispatch(self, client):
        ids = []
        client.on("request", lambda e: ids.append((e.request.request_id, get_request_id())))
        client.request(_get())
        request_id, bound = ids[0]
        assert request_id and request_id == bound
        assert get_request_id() == ""


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class TestAsyncClient:
    async def test_raw_bytes(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(200, content=PNG_SIGNATURE))
        async with AsyncClient(BASE, auth="key1", _transport=transport) as c:
            assert await c.request(_get("/fixed")) == PNG_SIGNATURE

    async def test_authorization(self, async_client, recorder):
        await async_client.request(_get())
        assert recorder.last.headers["authorization"] == "Bearer key1"

    async def test_429(self):
        transport = httpx.MockTransport(
            lambda req: httpx.Response(429, headers={"x-rate-limit-reset": "17"})
        )
        async with AsyncClient(BASE, _transport=transport) as c:
            with pytest.raises(RatelimitError) as exc_info:
                await c.request(_get())
        assert exc_info.value.ratelimit_reset == 17

    async def test_500(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(500, text="internal error"))
        async with AsyncClient(BASE, _transport=transport) as c:
            with pytest.raises(FapiError) as exc_info:
                await c.request(_get())
        assert exc_info.value.message == "internal error"
        assert exc_info.value.status_code == 500

    async def test_json_fallback(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(200, content=b"{broken"))
        async with AsyncClient(BASE, _transport=transport) as c:
            assert await c.request(_get(return_type=ReturnMethod.JSON)) == b"{broken"

    async def test_ratelimit_tracking(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(200, headers=_RATE_HEADERS))
        async with AsyncClient(BASE, _transport=transport) as c:
            await c.request(_get())
            assert c.ratelimits.remaining == 59

    async def test_events(self, async_client):
        seen = []
        async_client.on("request", lambda e: seen.append("request"))
        async_client.on("response", lambda e: seen.append("response"))
        await async_client.request(_get())
        assert seen == ["request", "response"]

    async def test_close(self):
        client = AsyncClient(BASE, _transport=httpx.MockTransport(lambda req: httpx.Response(200)))
        await client.request(_get())
        await client.close()
        assert client._client.is_closed
