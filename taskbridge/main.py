"""
HTTP application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn taskbridge.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskbridge.context.detector import context_detector
from taskbridge.core.config import settings
from taskbridge.monitoring.logger import configure_logging
from taskbridge.routers import tools


# ---------------------------------------------------------------------------
# LIFESPAN
# ---------------------------------------------------------------------------
# Detect the starting context once, like the MCP server does. Detection
# never raises, so startup cannot fail here.
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    await context_detector.detect_context()
    yield


# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
# Visit http://localhost:8000/docs to try the tools interactively
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# tools.router: /tools list + call, /prompts list + render
app.include_router(tools.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Does NOT run Taskwarrior; a missing `task` binary shows up as 502s on
    the tool endpoints instead.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
