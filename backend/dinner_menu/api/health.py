from fastapi import APIRouter

from dinner_menu.config import settings

router = APIRouter()


@router.get("/health")
def get_health() -> dict:
    return {"status": "ok", "service": settings.app_name}
