"""FastAPI application entry point for the BitScope API."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from bitscope import __version__
from bitscope.config import Settings, settings as default_settings
from bitscope.errors import register_error_handlers
from bitscope.logging_config import configure_logging
from bitscope.services.cache import SnapshotCache
from bitscope.services.refresher import Refresher
from bitscope.services.upstream import UpstreamClient

configure_logging(default_settings)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    run_refresher: bool = True,
) -> FastAPI:
    """Build the app with its own cache, upstream client and refresher.

    ``transport`` swaps the upstream HTTP transport (tests use a mock).
    With ``run_refresher=False`` the background loop is not started on
    startup and the cache stays empty until ``refresher.refresh()`` is awaited.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        problems = settings.validate()
        if problems:
            # A zero interval or limit would spin the refresher against upstream.
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")
        if run_refresher:
            app.state.refresher.start()
        logger.info("BitScope API running on http://%s:%d", settings.host, settings.port)
        try:
            yield
        finally:
            await app.state.refresher.stop()
            await app.state.upstream.aclose()

    app = FastAPI(title="BitScope API", version=__version__, lifespan=lifespan)

    app.state.settings = settings
    app.state.cache = SnapshotCache()
    app.state.upstream = UpstreamClient(settings, transport=transport)
    app.state.refresher = Refresher(app.state.upstream, app.state.cache, settings)

    # CORS: open to every origin on purpose
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from bitscope.routes.explorer import router as explorer_router
    from bitscope.routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(explorer_router)

    return app


app = create_app()
