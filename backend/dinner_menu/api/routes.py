from fastapi import APIRouter

from dinner_menu.api.health import router as health_router
from dinner_menu.api.menu import router as menu_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(menu_router)
