"""Main entry point for the AskHub application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from askhub.api.v1 import (
    answers_router,
    moderation_router,
    notifications_router,
    questions_router,
    users_router,
)
from askhub.core.errors import AskHubError
from askhub.core.settings import settings
from askhub.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="AskHub API",
    description="Q&A community API with voting, moderation and notifications",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(questions_router, prefix="/api/v1")
app.include_router(answers_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(AskHubError)
async def handle_domain_error(request: Request, exc: AskHubError) -> JSONResponse:
    """Render service-layer errors as ``{"detail", "kind", "data"}``."""
    if exc.status_code >= 500:
        logger.error("Unhandled %s on %s: %s", exc.kind, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.message, kind=exc.kind, data=exc.data).model_dump(),
    )


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "AskHub API",
        "version": settings.app_version,
        "description": "Q&A community API with voting, moderation and notifications",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("askhub.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
