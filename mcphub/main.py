# mcphub/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .catalog import Store, build_store, routers
from .config import Settings, get_settings
from .models import Envelope

logger = logging.getLogger(__name__)


def _envelope_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=Envelope.fail(error).to_json())


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "%s %s started (%d tools, %d posts, %d docs)",
            settings.app_name,
            settings.version,
            len(app.state.store.tools),
            len(app.state.store.blog),
            len(app.state.store.documentation),
        )
        yield

    app = FastAPI(
        title=settings.app_name,
        description="Catalogue, blog, documentation and contact API for MCP tools.",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(seed=settings.seed_data)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "invalid input") if errors else "invalid input"
        return _envelope_response(400, f"Invalid request: {detail}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _envelope_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _envelope_response(500, "Internal server error")

    @app.get("/")
    def root():
        return {"service": settings.app_name, "status": "ok", "version": settings.version}

    @app.get("/api/health")
    def health_check():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.version,
        }

    for router in routers:
        app.include_router(router)

    return app


app = create_app()
