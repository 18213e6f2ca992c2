from __future__ import annotations

import uuid

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from libs.common import AppSettings, configure_logging, get_settings
from libs.common.logging import set_correlation_id
from libs.common.storage import XmlFileStore

from .dependencies import get_file_store
from .exception_handlers import (
    request_validation_error_handler,
    unhandled_error_handler,
    xml_api_error_handler,
)
from .exceptions import XmlApiError
from .routes import router as api_router

APP_NAME = "XML Editor API"
APP_VERSION = "0.1.0"


def create_app(settings: AppSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    docs_enabled = settings.docs_enabled
    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    # Register exception handlers
    app.add_exception_handler(XmlApiError, xml_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(api_router)

    @app.middleware("http")
    async def tracing_middleware(request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-Id", str(uuid.uuid4()))
        set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            # Runs inside CORSMiddleware, so error responses keep the CORS headers
            response = await unhandled_error_handler(request, exc)
        response.headers["X-Correlation-Id"] = correlation_id
        return response

    # Added last: outermost middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_allowed_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["system"])
    async def root():
        endpoints = {
            "health": "/healthz",
            "xml": "/api/xml",
        }
        if docs_enabled:
            endpoints["docs"] = "/docs"
            endpoints["openapi"] = "/openapi.json"
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "status": "running",
            "endpoints": endpoints,
        }

    @app.get("/healthz", tags=["system"])
    async def health(store: XmlFileStore = Depends(get_file_store)):
        """Report whether the save folder exists yet (it is created on first save)."""
        storage_status = "ok" if store.base_path.is_dir() else "not created"
        return {"status": "ok", "storage": storage_status}

    return app


app = create_app()


def run():
    import uvicorn

    settings = get_settings()
    reload = settings.app_env == "local"
    # Import string format is required for reload mode
    target_app = "apps.xml_api.main:app"
    uvicorn.run(target_app, host=settings.api_host, port=settings.port, reload=reload)


if __name__ == "__main__":
    run()
