"""
Application factory.

    uvicorn crm.main:app

Middleware order (outermost first): RequestIDMiddleware, so error responses
carry the request id too, then ExceptionHandlingMiddleware around the routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from crm.api.v1 import auth
from crm.api.v1.error_handlers import ExceptionHandlingMiddleware, register_exception_handlers
from crm.api.v1.routes import build_api_router, ok
from crm.config.settings import get_settings
from crm.core.logging import RequestIDMiddleware, setup_logging
from crm.database.connection import get_connection_factory
from crm.utils.logging import get_project_name, get_project_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings)
    logger.info("app.startup", extra={"env": settings.ENV, "version": get_project_version()})

    yield

    # the engine is created lazily; nothing to dispose if no request used it
    if get_connection_factory.cache_info().currsize:
        await get_connection_factory().dispose()
    logger.info("app.shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title=get_project_name() or "crm-api",
        version=get_project_version(),
        lifespan=lifespan,
    )

    app.add_middleware(ExceptionHandlingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    api = APIRouter(prefix="/api")
    api.include_router(auth.router)
    api.include_router(build_api_router())
    app.include_router(api)

    @app.get("/health", tags=["health"])
    async def health():
        return ok({"status": "healthy", "version": get_project_version()})

    return app


app = create_app()
