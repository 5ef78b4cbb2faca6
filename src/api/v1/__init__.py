"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.admin import router as admin_router
from api.v1.routes.campus import router as campus_router
from api.v1.routes.discussions import router as discussions_router
from api.v1.routes.events import router as events_router
from api.v1.routes.lost_found import router as lost_found_router
from api.v1.routes.notices import router as notices_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.session import router as session_router

router = APIRouter()
router.include_router(session_router)
router.include_router(profiles_router)
router.include_router(events_router)
router.include_router(notices_router)
router.include_router(discussions_router)
router.include_router(lost_found_router)
router.include_router(campus_router)
router.include_router(admin_router)
