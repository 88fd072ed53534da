"""API routers for the Hikewise backend."""

from fastapi import APIRouter

from .auth import router as auth_router
from .health import router as health_router
from .weather import router as weather_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(weather_router)
api_router.include_router(auth_router)

__all__ = ["api_router"]
