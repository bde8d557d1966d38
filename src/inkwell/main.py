# src/inkwell/main.py
"""Main entry point for the Inkwell application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from inkwell.api.v1 import (
    comments_router,
    dashboard_router,
    feed_router,
    follows_router,
    likes_router,
    media_router,
    posts_router,
    public_router,
    users_router,
)
from inkwell.core.settings import settings
from inkwell.services.errors import InkwellError
from inkwell.services.media import ImageUploadsDisabledError
from inkwell.services.writing_assistant import (
    AssistantUnavailableError,
    WritingAssistantError,
    get_writing_assistant,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Inkwell API",
    description="Social graph and content ranking engine for a blogging platform",
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
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(likes_router, prefix="/api/v1")
app.include_router(follows_router, prefix="/api/v1")
app.include_router(feed_router, prefix="/api/v1")
app.include_router(public_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(media_router, prefix="/api/v1")


@app.exception_handler(InkwellError)
async def handle_domain_error(request: Request, exc: InkwellError) -> JSONResponse:
    """Render service-layer failures with their mapped status code."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(WritingAssistantError)
async def handle_assistant_error(request: Request, exc: WritingAssistantError) -> JSONResponse:
    code = status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, AssistantUnavailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content={"detail": str(exc)})


@app.exception_handler(ImageUploadsDisabledError)
async def handle_uploads_disabled(request: Request, exc: ImageUploadsDisabledError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_writing_assistant().close()
    logger.info("Inkwell API stopped")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Social graph and content ranking engine for a blogging platform",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inkwell.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
