"""Origin allow-list shared by the CORS middleware and the movie handlers."""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "GET, POST, PATCH, DELETE"
DEFAULT_ALLOWED_HEADERS = "Content-Type"

# Browsers send these without a pre-flight check.
SIMPLE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class OriginPolicy:
    """Decide whether a request origin may read our responses."""

    def __init__(self, allowed_origins: Iterable[str]) -> None:
        self.allowed_origins = frozenset(allowed_origins)

    def is_allowed(self, origin: str | None) -> bool:
        # No Origin header means same-origin or a non-browser client.
        if not origin:
            return True
        return origin in self.allowed_origins

    def response_headers(self, origin: str | None) -> dict[str, str]:
        if not origin or origin not in self.allowed_origins:
            return {}
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}

    def preflight_headers(
        self, origin: str | None, requested_headers: str | None = None
    ) -> dict[str, str]:
        headers = self.response_headers(origin)
        if headers:
            headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
            headers["Access-Control-Allow-Headers"] = requested_headers or DEFAULT_ALLOWED_HEADERS
            headers["Vary"] = "Origin, Access-Control-Request-Headers"
        return headers


class OriginMiddleware(BaseHTTPMiddleware):
    """Reject disallowed cross-origin writes and tag allowed responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        policy: OriginPolicy = request.app.state.origin_policy
        origin = request.headers.get("origin")

        if not policy.is_allowed(origin) and request.method not in SIMPLE_METHODS:
            logger.warning(
                "Rejected %s %s from origin %s", request.method, request.url.path, origin
            )
            return PlainTextResponse("Not allowed by CORS", status_code=403)

        response = await call_next(request)
        for name, value in policy.response_headers(origin).items():
            response.headers.setdefault(name, value)
        return response


def get_origin_policy(request: Request) -> OriginPolicy:
    return request.app.state.origin_policy
