"""Synchronous observer registry for request lifecycle events."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

REQUEST = "request"
RESPONSE = "response"
RATELIMIT = "ratelimit"

EVENTS: frozenset[str] = frozenset({REQUEST, RESPONSE, RATELIMIT})

Listener = Callable[[Any], Any]


class EventEmitter:
    """Maps an event name to an ordered list of listeners.

    Listeners run synchronously inside ``emit``. A listener that raises is
    logged and skipped; the remaining listeners still run and the caller of
    ``emit`` never sees the exception.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    @staticmethod
    def _check(event: str) -> None:
        if event not in EVENTS:
            raise ValueError(
                f"Unknown event {event!r}; expected one of {sorted(EVENTS)}"
            )

    def on(self, event: str, listener: Listener) -> EventEmitter:
        self._check(event)
        self._listeners[event].append(listener)
        return self

    def once(self, event: str, listener: Listener) -> EventEmitter:
        def _wrapper(payload: Any) -> Any:
            self.off(event, _wrapper)
            return listener(payload)

        _wrapper.listener = listener  # type: ignore[attr-defined]
        return self.on(event, _wrapper)

    def off(self, event: str, listener: Listener) -> EventEmitter:
        self._check(event)
        registered = self._listeners[event]
        for index, candidate in enumerate(registered):
            # once() stores a wrapper that remembers the original listener.
            if candidate == listener or getattr(candidate, "listener", None) == listener:
                del registered[index]
                break
        return self

    def listeners(self, event: str) -> list[Listener]:
        self._check(event)
        return list(self._listeners[event])

    def emit(self, event: str, payload: Any) -> int:
        """Call every listener for *event*. Returns how many were called."""
        called = 0
        for listener in self.listeners(event):
            called += 1
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener %r for %r event raised", listener, event)
        return called
