from fastapi import APIRouter

from court_archive import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Проверка работоспособности сервиса"""
    return {"status": "ok", "version": __version__}
