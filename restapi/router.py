"""Application configuration and router setup."""

import fastapi
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi
from starlette.exceptions import HTTPException as StarletteHTTPException

from components.core import init_db
from components.core.config import get_settings
from components.core.errors import JSONAPIError
from components.core.jsonapi import http_error_handler, jsonapi_error_handler, unhandled_error_handler
from components.core.log_config import configure_logging
from restapi.endpoints import health_check, payment
from restapi.middleware import JSONAPIMediaTypeMiddleware


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = fastapi.FastAPI(
        title=settings.SERVICE_NAME,
        description="JSON:API service for payment resources",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=init_db.lifespan,
    )

    # Error documents
    app.add_exception_handler(JSONAPIError, jsonapi_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Content negotiation sits inside CORS so preflight requests pass
    app.add_middleware(JSONAPIMediaTypeMiddleware, path_prefixes=[payment.router.prefix])
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_check.router)
    app.include_router(payment.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=settings.SERVICE_NAME,
            version=f"1.0.0-{settings.API_VERSION}",
            description="JSON:API service for payment resources",
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
