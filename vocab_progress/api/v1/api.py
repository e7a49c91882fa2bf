"""API router for version 1."""
from fastapi import APIRouter

from vocab_progress.api.v1.endpoints import progress, vocabulary


api_router = APIRouter()
api_router.include_router(progress.router)
api_router.include_router(vocabulary.router)
