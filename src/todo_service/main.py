"""FastAPI application entrypoint with Lambda handler."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

from .config import settings
from .errors import GenerationConfigError, TodoServiceError
from .routes import ai, health, tasks

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting {settings.service_name} in {settings.environment} mode (timezone {settings.timezone})")
    yield
    logger.info(f"Shutting down {settings.service_name}")


app = FastAPI(
    title="AI Todo Service",
    description="Natural-language task capture and AI task analysis",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TodoServiceError)
async def todo_service_error_handler(request: Request, exc: TodoServiceError) -> JSONResponse:
    """Render service errors as ``{"success": false, "error": ...}``."""
    if isinstance(exc, GenerationConfigError):
        logger.error(f"Configuration error on {request.url.path}: {exc.message}")
        message = exc.public_message
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path} ({exc.status_code}): {exc.message}")
        message = exc.message

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": message},
    )


# Include routers
app.include_router(health.router)
app.include_router(ai.router)
app.include_router(tasks.router, prefix="/tasks")

# Lambda handler via Mangum
handler = Mangum(app, lifespan="off")
