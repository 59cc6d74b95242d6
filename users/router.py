import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from auth.dependencies import get_current_user_id
from config.services import Services, get_services
from core.exceptions import Unauthorized
from models.schemas import UserCreate
from . import service

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", status_code=status.HTTP_201_CREATED, summary="Регистрация пользователя")
async def register(
    user_data: Optional[UserCreate] = Body(None),
    services: Services = Depends(get_services)
):
    """Создает пользователя и возвращает его id и email"""
    user = await service.create_user(services, user_data or UserCreate())
    return user.to_public()

@router.get("/me", summary="Текущий пользователь")
async def me(
    user_id: uuid.UUID = Depends(get_current_user_id),
    services: Services = Depends(get_services)
):
    user = await service.get_user(services, user_id)
    if user is None:
        raise Unauthorized()
    return user.to_public()
