"""
Content Page Editor - Main Application

FastAPI application that serves:
- The sidebar/editor page via Jinja2 templates
- Static files (CSS, JS)
- Form endpoints that create, edit and delete pages on the content API
- JSON endpoints for health and live field validation

Pages themselves live behind the remote content API; this process keeps an
in-memory cache of the list and the open page.
"""

import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from loguru import logger

from src.config import (
    APP_ENV,
    APP_HOST,
    APP_PORT,
    APP_VERSION,
    CONTENT_API_BASE_URL,
    DEBUG,
    LOG_LEVEL,
    STATIC_DIR,
    TEMPLATES_DIR,
)
from src.content_client import ContentService
from src.routes.api import router as api_router
from src.routes.pages import router as pages_router
from src.services.content_store import ContentStore

# ---------------------------------------------------------------------------
# Logging setup — stdout only
# ---------------------------------------------------------------------------
logger.remove()

logger.add(
    sys.stdout,
    level="DEBUG" if DEBUG else LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True,
)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    On startup the page list is fetched once so the first render is warm.
    A content API that is down at startup is not fatal: the list is fetched
    again on the next page view.
    """
    # --- Startup ---
    logger.info("🚀 Starting Content Page Editor v{}", APP_VERSION)
    logger.info("📋 Environment: {} | Debug: {}", APP_ENV, DEBUG)
    logger.info("🔗 Content API: {}", app.state.store.service.base_url)

    await app.state.store.refresh()
    if app.state.store.error is not None:
        logger.warning("⚠️  Content API not reachable yet — will retry on first request")

    logger.success("✅ Application ready — listening on {}:{}", APP_HOST, APP_PORT)

    yield

    # --- Shutdown ---
    logger.info("🛑 Shutting down Content Page Editor...")


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(service: Optional[ContentService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    *service* defaults to a client for ``CONTENT_API_BASE_URL``.
    """

    app = FastAPI(
        title="Content Page Editor",
        description=(
            "Sidebar/editor front end for a remote content API. "
            "List, create, edit and delete pages."
        ),
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if DEBUG else None,
        redoc_url="/redoc" if DEBUG else None,
    )

    app.state.store = ContentStore(service or ContentService(CONTENT_API_BASE_URL))

    # ------------------------------------------------------------------
    # Jinja2 templates
    # ------------------------------------------------------------------
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    # ------------------------------------------------------------------
    # Static files
    # ------------------------------------------------------------------
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # ------------------------------------------------------------------
    # Request logging middleware
    # ------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every incoming HTTP request with timing information."""
        start = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round(time.time() - start, 3)
            logger.error(
                "❌ {method} {path} — unhandled error after {duration}s: {exc}",
                method=request.method,
                path=request.url.path,
                duration=duration,
                exc=exc,
            )
            raise

        duration = round(time.time() - start, 3)
        status = response.status_code

        if status >= 500:
            log = logger.error
        elif status >= 400:
            log = logger.warning
        elif request.url.path.startswith("/static"):
            # Don't log every static file request at INFO level
            log = logger.debug
        else:
            log = logger.info

        log(
            "📤 {method} {path} — {status} [{duration}s]",
            method=request.method,
            path=request.url.path,
            status=status,
            duration=duration,
        )
        return response

    # ------------------------------------------------------------------
    # Register routers
    # ------------------------------------------------------------------
    app.include_router(api_router)  # /api/*  — JSON endpoints
    app.include_router(pages_router)  # /*      — HTML pages (must be last)

    return app


# ---------------------------------------------------------------------------
# Create the app instance (used by Uvicorn)
# ---------------------------------------------------------------------------
app = create_app()


# ---------------------------------------------------------------------------
# Direct execution (development)
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=APP_HOST,
        port=APP_PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info",
    )
