from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from statusboard.api.v1.router import v1_router
from statusboard.config import settings
from statusboard.core.exceptions import StatusboardError, statusboard_error_handler
from statusboard.core.middleware import RequestLoggingMiddleware
from statusboard.services.telemetry.engine import DashboardEngine

_NAME_TO_LEVEL = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "warn": 30,
    "error": 40,
    "critical": 50,
}

structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _NAME_TO_LEVEL.get(settings.statusboard_log_level.lower(), 20)
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the engine (config resolution + scheduler) and tear it down on shutdown."""
    engine = getattr(app.state, "engine", None)
    if engine is None:
        engine = DashboardEngine()
        app.state.engine = engine

    logger.info("statusboard_starting", config_source=settings.statusboard_config_url)
    await engine.start()
    yield

    await engine.stop()
    logger.info("statusboard_stopping")


app = FastAPI(
    title="Statusboard",
    description="Live service status dashboard backend",
    version="0.1.0",
    lifespan=lifespan,
)

# Exception handler
app.add_exception_handler(StatusboardError, statusboard_error_handler)

# Middleware (Starlette: last-added = outermost)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.statusboard_cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

# Routes
app.include_router(v1_router)


@app.get("/")
async def root():
    return {"service": "statusboard", "version": "0.1.0"}
