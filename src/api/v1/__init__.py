"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.auth import router as auth_router
from api.v1.routes.maintenance import router as maintenance_router

router = APIRouter()
router.include_router(auth_router)

__all__ = ["router", "maintenance_router"]
