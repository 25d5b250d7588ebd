"""Typed Python client for the fAPI image manipulation service."""

from __future__ import annotations

import logging

__version__ = "2.1.0"

from fapi.client import AsyncClient, Client  # noqa: E402
from fapi.exceptions import FapiError, RatelimitError  # noqa: E402
from fapi.models import (  # noqa: E402
    BodyWithHeaders,
    HttpMethod,
    ImageFormat,
    RatelimitEvent,
    RatelimitState,
    Request,
    RequestEvent,
    ResponseEvent,
    ReturnMethod,
)
from fapi.routes import BASE_URL, Routes  # noqa: E402
from fapi.schemas import ImageScriptResult, QuoteOptions  # noqa: E402

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AsyncClient",
    "Client",
    "FapiError",
    "RatelimitError",
    "BodyWithHeaders",
    "HttpMethod",
    "ImageFormat",
    "RatelimitEvent",
    "RatelimitState",
    "Request",
    "RequestEvent",
    "ResponseEvent",
    "ReturnMethod",
    "BASE_URL",
    "Routes",
    "ImageScriptResult",
    "QuoteOptions",
    "__version__",
]
