from fastapi import APIRouter

from farewatch import __version__
from farewatch.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "version": __version__,
        "env": settings.env,
    }
