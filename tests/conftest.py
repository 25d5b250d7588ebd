from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from fapi import AsyncClient, Client

BASE = "http://test"

Responder = Callable[[httpx.Request], httpx.Response]


class Recorder:
    """MockTransport handler that remembers every request it answered."""

    def __init__(self, responder: Responder | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.responder = responder or (lambda req: httpx.Response(200, content=b"ok"))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def client(recorder: Recorder):
    with Client(BASE, auth="key1", _transport=httpx.MockTransport(recorder)) as c:
        yield c


@pytest.fixture
async def async_client(recorder: Recorder):
    async with AsyncClient(
        BASE, auth="key1", _transport=httpx.MockTransport(recorder)
    ) as c:
        yield c


@pytest.fixture
def make_client():
    """Factory for sync clients answering with *responder*; closed at teardown."""
    made: list[Client] = []

    def _make(responder: Responder, **kwargs) -> tuple[Client, Recorder]:
        rec = Recorder(responder)
        kwargs.setdefault("auth", "key1")
        c = Client(BASE, _transport=httpx.MockTransport(rec), **kwargs)
        made.append(c)
        return c, rec

    yield _make
    for c in made:
        c.close()
