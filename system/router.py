from fastapi import APIRouter, Depends
from fastapi_cache.decorator import cache

from config.services import Services, get_services
from config.settings import settings

router = APIRouter(tags=["system"])

@router.get("/status", summary="Состояние хранилищ")
async def get_status(services: Services = Depends(get_services)):
    """Доступны ли Redis и база"""
    return {
        "redis": await services.sessions.is_healthy(),
        "db": await services.metadata.is_healthy(),
    }

@router.get("/stats", summary="Статистика")
@cache(expire=settings.STATS_CACHE_SECONDS)
async def get_stats(services: Services = Depends(get_services)):
    """Количество пользователей и файлов"""
    return {
        "users": await services.metadata.count_users(),
        "files": await services.metadata.count_files(),
    }
