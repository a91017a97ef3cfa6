"""Pronunciation-practice BFF — FastAPI application entry point.

Run from ``backend/`` with ``uvicorn bff.main:app``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from bff.config import settings
from bff.gateway import Gateway
from bff.routes import api, languages

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(gateway: Gateway | None = None) -> FastAPI:
    """Build the application.

    Without an injected *gateway*, the production one is built on startup;
    a missing API_KEY raises there and the server refuses to start.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle."""
        if getattr(app.state, "gateway", None) is None:
            app.state.gateway = Gateway.from_settings(settings)
            logger.info(
                "Gateway ready (text model %s, TTS model %s, cache TTL %ss)",
                settings.TEXT_MODEL, settings.TTS_MODEL, settings.CACHE_TTL_SECONDS,
            )
        yield
        app.state.gateway.cache.clear()

    app = FastAPI(
        title="Pronunciation Practice BFF",
        description="Backend-for-frontend proxy for word generation, speech and pronunciation scoring",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    # ── CORS ────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

    # ── Routes ──────────────────────────────────────────────────
    app.include_router(api.router, prefix="/api")
    app.include_router(languages.router, prefix="/api")
    app.add_exception_handler(StarletteHTTPException, api.method_not_allowed_handler)

    @app.get("/api/health")
    async def health_check(request: Request):
        return {"status": "ok", "cache_entries": len(request.app.state.gateway.cache)}

    return app


configure_logging()
app = create_app()
