"""FastAPI application serving golf performance views."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import Settings, configure_logging
from backend.connection import backend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the backend session on startup, close on shutdown."""
    settings = app.state.settings
    configure_logging(settings.log_level)
    backend.initialize(settings.backend_url, timeout=settings.timeout, retries=settings.retries)
    app.state.backend = backend
    logger.info("Using golf backend at %s", settings.backend_url)
    yield
    backend.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(
        title="Golf Performance API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import coaching, comparison, courses, goals, reports, share, statistics
    app.include_router(statistics.router, prefix="/api/statistics", tags=["statistics"])
    app.include_router(comparison.router, prefix="/api/comparison", tags=["comparison"])
    app.include_router(goals.router, prefix="/api/goals", tags=["goals"])
    app.include_router(share.router, prefix="/api/share", tags=["share"])
    app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
    app.include_router(coaching.router, prefix="/api/coaching", tags=["coaching"])
    app.include_router(reports.router, prefix="/api/reports", tags=["reports"])

    @app.get("/api/health")
    async def health():
        loop = asyncio.get_running_loop()
        healthy = await loop.run_in_executor(None, app.state.backend.health_check)
        return {"status": "ok" if healthy else "degraded", "backend": healthy}

    return app


app = create_app()
