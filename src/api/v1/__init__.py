"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.me import router as me_router
from api.v1.routes.plans import router as plans_router
from api.v1.routes.profiles import router as profiles_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(me_router)
router.include_router(plans_router)
