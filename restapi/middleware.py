"""Content negotiation for JSON:API resources."""

import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from components.core.errors import UnsupportedMediaType
from components.core.jsonapi import MEDIA_TYPE, accepts_jsonapi, error_response

logger = logging.getLogger(__name__)


class JSONAPIMediaTypeMiddleware(BaseHTTPMiddleware):
    """Reject requests under the given path prefixes unless they accept JSON:API.

    Runs ahead of routing, so unknown sub-paths and methods are rejected too.
    """

    def __init__(self, app, path_prefixes: Iterable[str] = ("/payments",)) -> None:
        super().__init__(app)
        self.path_prefixes = tuple(prefix.rstrip("/") for prefix in path_prefixes)

    def _is_gated(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix + "/")
            for prefix in self.path_prefixes
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._is_gated(request.url.path):
            accept = request.headers.get("accept")
            if not accepts_jsonapi(accept):
                logger.info(
                    "Rejected %s %s with Accept %r",
                    request.method, request.url.path, accept,
                )
                return error_response(
                    UnsupportedMediaType(f"Accept header must include {MEDIA_TYPE}")
                )
        return await call_next(request)
