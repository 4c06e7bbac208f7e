"""FastAPI application factory."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from voirdrama.infrastructure.config import AppConfig
from voirdrama.infrastructure.metrics import AddonStats
from voirdrama.interfaces.api.stremio.router import ADDON_VERSION
from voirdrama.interfaces.api.stremio.router import router as stremio_router
from voirdrama.interfaces.app_state import AppState
from voirdrama.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Build the app around ``config``.

    Nothing is opened here; the cache, HTTP client and use cases are created
    by ``lifespan`` and live on ``app.state``.
    """
    app = FastAPI(
        title="VoirDrama",
        description="Stremio addon for the VoirDrama catalog",
        version=ADDON_VERSION,
        lifespan=lifespan,
    )
    app.state = AppState()
    app.state.config = config
    app.state.stats = AddonStats()
    app.include_router(stremio_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str | list[str]]:
        chain = getattr(app.state, "resolution_chain", None)
        return {"status": "ok", "hosters": chain.supported_hosters if chain else []}

    @app.middleware("http")
    async def access_log(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000.0, 2),
                client_host=request.client.host if request.client else None,
            )

    return app
