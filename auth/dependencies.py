import uuid
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader

from config.services import Services, get_services
from core.exceptions import Unauthorized
from .utils import resolve_session

token_header = APIKeyHeader(name="X-Token", auto_error=False)

async def get_optional_user_id(
    token: Optional[str] = Depends(token_header),
    services: Services = Depends(get_services)
) -> Optional[uuid.UUID]:
    """Id пользователя по X-Token или None для анонимного запроса"""
    return await resolve_session(services.sessions, token)

async def get_current_user_id(
    user_id: Optional[uuid.UUID] = Depends(get_optional_user_id)
) -> uuid.UUID:
    """Проверяет токен: нет токена, чужой или истекший дают одинаковый 401"""
    if user_id is None:
        raise Unauthorized()
    return user_id
