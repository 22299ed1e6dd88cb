"""JSON:API media type, documents and error rendering."""

import json
import logging
from http import HTTPStatus
from typing import Any, Dict, Optional, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from components.core.errors import (
    BadRequest,
    JSONAPIError,
    ResourceIdConflict,
    ResourceTypeConflict,
)

logger = logging.getLogger(__name__)

MEDIA_TYPE = "application/vnd.api+json"


class JSONAPIResponse(JSONResponse):
    media_type = MEDIA_TYPE


def accepts_jsonapi(accept_header: Optional[str]) -> bool:
    """Check whether an Accept header lists the JSON:API media type.

    Media type parameters are ignored, so ``application/vnd.api+json; q=0.9``
    is accepted. Wildcards are not.
    """
    if not accept_header:
        return False
    for media_range in accept_header.split(","):
        media_type = media_range.split(";", 1)[0].strip().lower()
        if media_type == MEDIA_TYPE:
            return True
    return False


def error_response(error: JSONAPIError) -> JSONAPIResponse:
    return JSONAPIResponse(
        status_code=error.status_code,
        content={"errors": error.to_errors()},
    )


async def read_resource_document(
    request: Request,
    resource_type: str,
    resource_id: Optional[str] = None,
) -> Tuple[Optional[str], Dict[str, Any]]:
    """Decode an inbound resource document.

    Returns the ``data.id`` (if any) and the raw ``data.attributes`` mapping.
    A missing ``attributes`` member is an empty attribute set.
    """
    body = await request.body()
    try:
        document = json.loads(body) if body else None
    except ValueError:
        raise BadRequest("Request body is not valid JSON")

    if not isinstance(document, dict) or not isinstance(document.get("data"), dict):
        raise BadRequest("Request body must contain a 'data' object")
    data = document["data"]

    data_type = data.get("type")
    if data_type is not None and data_type != resource_type:
        raise ResourceTypeConflict(f"Resource type must be '{resource_type}', got '{data_type}'")

    data_id = data.get("id")
    if resource_id is not None and data_id is not None and str(data_id) != resource_id:
        raise ResourceIdConflict(f"Resource id '{data_id}' does not match '{resource_id}'")

    attributes = data.get("attributes")
    if attributes is None:
        attributes = {}
    if not isinstance(attributes, dict):
        raise BadRequest("'data.attributes' must be an object")
    return data_id, attributes


async def jsonapi_error_handler(request: Request, exc: JSONAPIError) -> JSONAPIResponse:
    return error_response(exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONAPIResponse:
    """Render framework errors (unknown route, wrong method) as JSON:API errors."""
    error_type = HTTPStatus(exc.status_code).phrase
    return JSONAPIResponse(
        status_code=exc.status_code,
        content={"errors": [{"type": error_type, "detail": str(exc.detail)}]},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONAPIResponse:
    """Last resort for unexpected failures, e.g. database errors."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONAPIResponse(
        status_code=500,
        content={"errors": [{"type": "Internal Server Error", "detail": "Unexpected server error"}]},
    )
