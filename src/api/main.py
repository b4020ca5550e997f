import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response

from src.api.errors import register_exception_handlers
from src.api.routes import newsletters, subscriptions
from src.app_shell.config import Settings, load_settings
from src.app_shell.context import AppContext
from src.app_shell.telemetry import generate_request_id, request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    settings: Settings | None = None,
    context: AppContext | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    With a context (tests) it is used as-is. Otherwise settings are loaded
    (if not given) and the context is built at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned: AppContext | None = None
        if getattr(app.state, "context", None) is None:
            # Fail fast on bad configuration
            resolved = settings or load_settings()
            owned = AppContext.create(resolved)
            app.state.context = owned
            logger.info("Application context created (db=%s)", resolved.database.path)

        yield

        if owned is not None:
            owned.close()
            app.state.context = None

    app = FastAPI(
        title="Newsletter API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.context = context

    register_exception_handlers(app)

    @app.middleware("http")
    async def request_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    # --- Routers ---
    app.include_router(subscriptions.router, prefix="/subscriptions", tags=["Subscriptions"])
    app.include_router(newsletters.router, prefix="/newsletters", tags=["Newsletters"])

    @app.get("/health_check")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "api"}

    return app


app = create_app()
