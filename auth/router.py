import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from config.services import Services, get_services
from core.exceptions import Unauthorized
from users.service import authenticate
from .dependencies import token_header
from .utils import create_session, resolve_session, revoke_session

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)

# Email и пароль приходят в заголовке Authorization: Basic
basic_scheme = HTTPBasic(auto_error=False)

async def get_basic_credentials(request: Request) -> Optional[HTTPBasicCredentials]:
    """Учетные данные из заголовка; битый заголовок считается отсутствующим"""
    try:
        return await basic_scheme(request)
    except HTTPException:
        return None

@router.get("/connect", summary="Вход")
async def connect(
    credentials: Optional[HTTPBasicCredentials] = Depends(get_basic_credentials),
    services: Services = Depends(get_services)
):
    """Проверяет учетные данные и выдает токен сессии"""
    if credentials is None:
        raise Unauthorized()

    user = await authenticate(services, credentials.username, credentials.password)
    if user is None:
        raise Unauthorized()

    token = await create_session(services.sessions, user.id)
    logger.info(f"Session opened for user {user.id}")
    return {"token": token}

@router.get("/disconnect", status_code=status.HTTP_204_NO_CONTENT, summary="Выход")
async def disconnect(
    token: Optional[str] = Depends(token_header),
    services: Services = Depends(get_services)
):
    """Удаляет сессию по X-Token"""
    user_id = await resolve_session(services.sessions, token)
    if user_id is None:
        raise Unauthorized()

    await revoke_session(services.sessions, token)
    logger.info(f"Session closed for user {user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
