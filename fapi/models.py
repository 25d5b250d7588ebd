"""Lightweight runtime records shared by the dispatcher and the endpoints."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

import httpx

logger = logging.getLogger(__name__)

# Response headers the client reads itself.
RATELIMIT_LIMIT = "x-rate-limit-limit"
RATELIMIT_REMAINING = "x-rate-limit-remaining"
RATELIMIT_RESET = "x-rate-limit-reset"
CONTENT_TYPE = "content-type"
IMAGESCRIPT_CPUTIME = "x-imagescript-cputime"
IMAGESCRIPT_WALLTIME = "x-imagescript-walltime"
IMAGESCRIPT_MEMORY = "x-imagescript-memory"

DEFAULT_CONTENT_TYPE = "application/json"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_header_int(raw: str | None) -> int | None:
    """Leading integer of a header value (``"17.5"`` -> 17), or None if there is none."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class ReturnMethod(str, Enum):
    """How a successful response body is handed back to the caller."""

    BODY = "body"
    TEXT = "text"
    JSON = "json"


class ImageFormat(str, Enum):
    PNG = "png"
    GIF = "gif"


CONTENT_TYPE_FORMATS: dict[str, ImageFormat] = {
    "image/png": ImageFormat.PNG,
    "image/gif": ImageFormat.GIF,
}


@dataclass
class Request:
    """Everything needed to send one call to fAPI. Built per call, never reused."""

    method: HttpMethod
    path: str = ""
    query: Mapping[str, Any] | None = None
    body: Any = None
    content_type: str | None = None
    return_type: ReturnMethod = ReturnMethod.BODY
    return_headers: bool = False
    url: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    request_id: str = ""

    @property
    def target(self) -> str:
        """The absolute URL override if set, otherwise the base-relative path."""
        return self.url or self.path


@dataclass(frozen=True)
class BodyWithHeaders:
    body: Any
    headers: httpx.Headers


@dataclass
class RatelimitState:
    """Most recently observed ``x-rate-limit-*`` headers.

    Each field is overwritten only when its header is present, so the three
    values may come from different responses.
    """

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        parsed: dict[str, int] = {}
        for attr, name in (
            ("limit", RATELIMIT_LIMIT),
            ("remaining", RATELIMIT_REMAINING),
            ("reset", RATELIMIT_RESET),
        ):
            raw = headers.get(name)
            if raw is None:
                continue
            value = parse_header_int(raw)
            if value is None:
                logger.debug("Ignoring non-numeric %s header: %r", name, raw)
                continue
            parsed[attr] = value

        with self._lock:
            for attr, value in parsed.items():
                setattr(self, attr, value)

    def snapshot(self) -> RatelimitState:
        with self._lock:
            return RatelimitState(limit=self.limit, remaining=self.remaining, reset=self.reset)


# -- event payloads ----------------------------------------------------------


@dataclass(frozen=True)
class RequestEvent:
    request: Request


@dataclass(frozen=True)
class ResponseEvent:
    request: Request
    response: httpx.Response


@dataclass(frozen=True)
class RatelimitEvent:
    request: Request
    response: httpx.Response
    ratelimit_reset: int
