"""Versioned API route modules."""

from fastapi import APIRouter

from fable.api.routes.config import router as config_router
from fable.api.routes.session import router as session_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(session_router, tags=["Session"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
