import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import StreamingResponse

from auth.dependencies import get_current_user_id, get_optional_user_id
from config.services import Services, get_services
from models.schemas import EntryCreate
from . import service

router = APIRouter(prefix="/files", tags=["files"])

@router.post("", status_code=status.HTTP_201_CREATED, summary="Загрузить файл или создать папку")
async def upload(
    entry: Optional[EntryCreate] = Body(None),
    user_id: uuid.UUID = Depends(get_current_user_id),
    services: Services = Depends(get_services)
):
    """Принимает name, type, isPublic, parentId и data (base64)"""
    # Пустое тело проверяется сервисом как запрос без полей
    created = await service.create_entry(services, user_id, entry or EntryCreate())
    return created.to_public()

@router.get("", summary="Список файлов папки")
async def list_files(
    parentId: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    user_id: uuid.UUID = Depends(get_current_user_id),
    services: Services = Depends(get_services)
):
    """Возвращает до 20 записей; страница за пределами списка дает []"""
    entries = await service.list_entries(services.metadata, user_id, parentId, page)
    return [entry.to_public() for entry in entries]

@router.get("/{file_id}", summary="Получить запись")
async def show(
    file_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    services: Services = Depends(get_services)
):
    entry = await service.get_owned_entry(services.metadata, user_id, file_id)
    return entry.to_public()

@router.put("/{file_id}/publish", summary="Сделать публичным")
async def publish(
    file_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    services: Services = Depends(get_services)
):
    entry = await service.set_visibility(services.metadata, user_id, file_id, True)
    return entry.to_public()

@router.put("/{file_id}/unpublish", summary="Сделать приватным")
async def unpublish(
    file_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    services: Services = Depends(get_services)
):
    entry = await service.set_visibility(services.metadata, user_id, file_id, False)
    return entry.to_public()

@router.get("/{file_id}/data", summary="Скачать содержимое")
async def download(
    file_id: str,
    size: Optional[str] = Query(None),
    user_id: Optional[uuid.UUID] = Depends(get_optional_user_id),
    services: Services = Depends(get_services)
):
    """Публичный файл доступен всем, приватный только владельцу"""
    _, media_type, stream = await service.open_content(services, file_id, user_id, size)
    return StreamingResponse(stream, media_type=media_type)
