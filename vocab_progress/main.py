"""FastAPI application factory."""
from __future__ import annotations

import sys
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from vocab_progress.api.v1 import api_router
from vocab_progress.config import settings
from vocab_progress.utils.exceptions import ProgressEngineException, to_http_exception


tags_metadata: List[dict[str, str]] = [
    {"name": "progress", "description": "Review vocabulary and query spaced-repetition progress."},
    {"name": "vocabulary", "description": "Browse and remove catalog vocabulary."},
]


def configure_logging() -> None:
    """Route loguru output to stderr at the configured level."""

    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""

    configure_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Spaced-repetition progress tracking for vocabulary learners.",
        version="0.1.0",
        openapi_tags=tags_metadata,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors(), "message": "Validation failed"},
        )

    @app.exception_handler(ProgressEngineException)
    async def application_exception_handler(
        request: Request, exc: ProgressEngineException
    ) -> JSONResponse:
        http_exc = to_http_exception(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content={"detail": http_exc.detail},
            headers=http_exc.headers,
        )

    @app.get("/health", include_in_schema=False)
    def health() -> dict[str, str]:
        return {"status": "OK"}

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
