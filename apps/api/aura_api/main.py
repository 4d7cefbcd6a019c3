"""FastAPI application for the AURA room API."""
from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .core.config import settings
from .core.errors import AuraError
from .routers import rooms as rooms_router
from .services.room_registry import RoomRegistry

APP_NAME = "AURA Backend API"
APP_VERSION = "1.0.0"

_STARTED_AT = time.monotonic()

app = FastAPI(title=APP_NAME, version=APP_VERSION)
app.state.room_registry = RoomRegistry()

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(AuraError)
async def handle_aura_error(request: Request, exc: AuraError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(rooms_router.router, prefix="/api", tags=["rooms"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.get("/", tags=["meta"])
async def index() -> dict[str, str]:
    """Return service identification."""

    return {"name": APP_NAME, "version": APP_VERSION, "status": "running"}


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Basic health check."""

    return {"status": "ok", "timestamp": _now_iso()}


@app.head("/api/health", tags=["meta"])
async def health_head() -> Response:
    return Response(status_code=200)


@app.get("/health", tags=["meta"])
async def liveness() -> dict[str, object]:
    """Liveness probe including process uptime in seconds."""

    return {
        "status": "ok",
        "timestamp": _now_iso(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }
