"""Exception hierarchy for the fAPI client."""

from __future__ import annotations

from http import HTTPStatus

from fapi.models import Request

RATELIMIT_STATUS_CODE = 429


class FapiError(Exception):
    """Raised when fAPI answers with anything other than 200.

    ``message`` is the raw response body.
    """

    def __init__(self, message: str, status_code: int, request: Request | None = None) -> None:
        self.message = message
        self.status_code = status_code
        self.request = request
        super().__init__(message)


class RatelimitError(FapiError):
    """Raised on 429 responses. Never retried by the client."""

    def __init__(self, ratelimit_reset: int, request: Request | None = None) -> None:
        super().__init__(
            HTTPStatus(RATELIMIT_STATUS_CODE).phrase,
            RATELIMIT_STATUS_CODE,
            request,
        )
        self.ratelimit_reset = ratelimit_reset
