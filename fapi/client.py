"""Sync and async clients for fAPI, sharing one request dispatcher."""

from __future__ import annotations

import logging
import platform
import time
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from fapi import __version__
from fapi.config import settings
from fapi.endpoints import Endpoints
from fapi.events import RATELIMIT, REQUEST, RESPONSE, EventEmitter, Listener
from fapi.exceptions import RATELIMIT_STATUS_CODE, FapiError, RatelimitError
from fapi.models import (
    CONTENT_TYPE,
    DEFAULT_CONTENT_TYPE,
    RATELIMIT_RESET,
    BodyWithHeaders,
    HttpMethod,
    RatelimitEvent,
    RatelimitState,
    Request,
    RequestEvent,
    ResponseEvent,
    ReturnMethod,
    parse_header_int,
)
from fapi.request_context import generate_request_id, request_id_var

logger = logging.getLogger(__name__)

_T = TypeVar("_T")
_U = TypeVar("_U")

SUCCESS_STATUS_CODE = 200
BEARER_PREFIX = "Bearer"

USER_AGENT = (
    f"fAPIClient v{__version__} "
    f"({platform.system()} {platform.release()}; {platform.machine()})"
)


def normalize_auth(token: str | None) -> str:
    """Prefix *token* with the bearer scheme unless it already carries it."""
    if not token:
        return ""
    if token.startswith(BEARER_PREFIX):
        return token
    return f"{BEARER_PREFIX} {token}"


def _check_timeout(value: int) -> int:
    if value <= 0:
        raise ValueError(f"timeout must be a positive number of milliseconds, got {value!r}")
    return value


def _parse_reset(response: httpx.Response) -> int:
    return parse_header_int(response.headers.get(RATELIMIT_RESET)) or 0


def _decode(request: Request, response: httpx.Response) -> Any:
    if request.return_type is ReturnMethod.JSON:
        try:
            return response.json()
        except ValueError:
            # Callers of malformed-JSON endpoints rely on getting the raw body.
            logger.debug(
                "Response from %s is not valid JSON, returning raw body",
                request.target,
            )
            return response.content
    if request.return_type is ReturnMethod.TEXT:
        return response.text
    return response.content


# ---------------------------------------------------------------------------
# Shared dispatcher
# ---------------------------------------------------------------------------


class _BaseClient(Endpoints):
    """State and dispatch steps common to both clients.

    Subclasses own the httpx client and implement ``request`` and ``_then``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        auth: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.base_url = base_url or settings.base_url
        self._auth = normalize_auth(auth if auth is not None else settings.auth)
        self._timeout = _check_timeout(timeout or settings.timeout)
        self.ratelimit_state = RatelimitState()
        self.events = EventEmitter()

    def _client_kwargs(self) -> dict[str, Any]:
        headers = {"User-Agent": USER_AGENT}
        if self._auth:
            headers["Authorization"] = self._auth
        return {
            "base_url": self.base_url,
            "headers": headers,
            "timeout": self._timeout / 1000,
        }

    # -- properties ----------------------------------------------------------

    @property
    def ratelimits(self) -> RatelimitState:
        """The most recently returned rate-limit headers, if any."""
        return self.ratelimit_state.snapshot()

    @property
    def timeout(self) -> int:
        """Per-request timeout in milliseconds."""
        return self._timeout

    @timeout.setter
    def timeout(self, value: int) -> None:
        self._timeout = _check_timeout(value)

    # -- events --------------------------------------------------------------

    def on(self, event: str, listener: Listener) -> _BaseClient:
        self.events.on(event, listener)
        return self

    def once(self, event: str, listener: Listener) -> _BaseClient:
        self.events.once(event, listener)
        return self

    def off(self, event: str, listener: Listener) -> _BaseClient:
        self.events.off(event, listener)
        return self

    # -- dispatch steps ------------------------------------------------------

    def _prepare(self, request: Request) -> dict[str, Any]:
        """Build the httpx call for *request* and announce it."""
        headers = dict(request.headers)
        if request.method is not HttpMethod.GET and request.body is not None:
            headers[CONTENT_TYPE] = request.content_type or DEFAULT_CONTENT_TYPE
        request.headers = headers

        self.events.emit(REQUEST, RequestEvent(request=request))

        kwargs: dict[str, Any] = {
            "method": request.method.value,
            "url": request.target,
            "headers": headers,
            "timeout": self._timeout / 1000,
        }
        if request.query:
            kwargs["params"] = dict(request.query)
        if isinstance(request.body, (bytes, str)):
            kwargs["content"] = request.body
        elif request.body is not None:
            kwargs["json"] = request.body

        logger.debug(
            "%s %s", request.method.value, request.target,
            extra={"method": request.method.value, "target": request.target},
        )
        return kwargs

    def _handle_response(
        self,
        request: Request,
        response: httpx.Response,
        elapsed_ms: float,
    ) -> Any:
        self.ratelimit_state.update_from_headers(response.headers)

        if response.status_code == RATELIMIT_STATUS_CODE:
            ratelimit_reset = _parse_reset(response)
            logger.warning(
                "Rate limited on %s %s (reset %d)",
                request.method.value, request.target, ratelimit_reset,
                extra={
                    "method": request.method.value,
                    "target": request.target,
                    "status_code": response.status_code,
                    "ratelimit_reset": ratelimit_reset,
                },
            )
            self.events.emit(
                RATELIMIT,
                RatelimitEvent(
                    request=request,
                    response=response,
                    ratelimit_reset=ratelimit_reset,
                ),
            )
            raise RatelimitError(ratelimit_reset, request)

        self.events.emit(RESPONSE, ResponseEvent(request=request, response=response))

        logger.debug(
            "%s %s -> %d (%.1f ms)",
            request.method.value, request.target, response.status_code, elapsed_ms,
            extra={
                "method": request.method.value,
                "target": request.target,
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 1),
            },
        )

        if response.status_code != SUCCESS_STATUS_CODE:
            raise FapiError(response.text, response.status_code, request)

        value = _decode(request, response)
        if request.return_headers:
            return BodyWithHeaders(body=value, headers=response.headers)
        return value


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class Client(_BaseClient):
    """Synchronous fAPI client (backed by ``httpx.Client``)."""

    def __init__(
        self,
        base_url: str | None = None,
        auth: str | None = None,
        timeout: int | None = None,
        *,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, auth, timeout)
        kwargs = self._client_kwargs()
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.Client(**kwargs)

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(self, request: Request) -> Any:
        """Send *request* and return its decoded body.

        Raises ``RatelimitError`` on 429 and ``FapiError`` on any other
        non-200 status. Transport errors from httpx propagate unchanged.
        """
        request.request_id = request.request_id or generate_request_id()
        token = request_id_var.set(request.request_id)
        try:
            kwargs = self._prepare(request)
            start = time.perf_counter()
            response = self._client.request(**kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000
            return self._handle_response(request, response, elapsed_ms)
        finally:
            request_id_var.reset(token)

    def _then(self, result: _T, callback: Callable[[_T], _U]) -> _U:
        return callback(result)


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncClient(_BaseClient):
    """Async fAPI client (backed by ``httpx.AsyncClient``).

    Every endpoint method returns an awaitable.
    """

    def __init__(
        self,
        base_url: str | None = None,
        auth: str | None = None,
        timeout: int | None = None,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, auth, timeout)
        kwargs = self._client_kwargs()
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.AsyncClient(**kwargs)

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def request(self, request: Request) -> Any:
        request.request_id = request.request_id or generate_request_id()
        token = request_id_var.set(request.request_id)
        try:
            kwargs = self._prepare(request)
            start = time.perf_counter()
            response = await self._client.request(**kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000
            return self._handle_response(request, response, elapsed_ms)
        finally:
            request_id_var.reset(token)

    def _then(
        self,
        pending: Awaitable[_T],
        callback: Callable[[_T], _U],
    ) -> Awaitable[_U]:
        async def _chain() -> _U:
            return callback(await pending)

        return _chain()
