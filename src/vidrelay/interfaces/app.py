"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import Response

from vidrelay import __version__
from vidrelay.infrastructure.config import AppConfig
from vidrelay.interfaces.app_state import AppState
from vidrelay.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create the FastAPI app: configuration only, no resource initialization.

    Resources (HTTP client, use case, proxy) are created in lifespan().
    """
    app = FastAPI(
        title="vidrelay",
        description="Douyin share link resolver and media relay",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from vidrelay.interfaces.api.video import router as video_router
    from vidrelay.interfaces.api.video import validation_error_handler

    app.include_router(video_router)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/api/healthz")
    async def healthz() -> dict[str, str | list[str]]:
        """Liveness probe listing the active extraction strategies."""
        use_case = getattr(app.state, "resolve_video_uc", None)
        return {
            "status": "ok",
            "strategies": use_case.strategy_names if use_case else [],
        }

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
