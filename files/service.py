"""Файлы и папки: создание, листинг, видимость и выдача содержимого.

Все функции получают хранилища явно (через ``Services``) и бросают
ошибки из ``core.exceptions``; HTTP-слой их только пробрасывает.
"""

import base64
import binascii
import logging
import mimetypes
import uuid
from typing import AsyncIterator, List, Optional, Tuple

from config.services import Services
from config.settings import settings
from core.exceptions import (
    InvalidData,
    InvalidKind,
    MissingData,
    MissingName,
    NoContent,
    NotFound,
    ParentNotAFolder,
    ParentNotFound,
)
from core.ids import ROOT, ROOT_ALIASES, ParentRef, Under, parse_id, parent_to_column
from models.schemas import EntryCreate, FileEntry, FileKind
from storage.base import MetadataStore

logger = logging.getLogger(__name__)

FILES = "files"
DEFAULT_MEDIA_TYPE = "application/octet-stream"


def parse_parent_ref(raw) -> Optional[ParentRef]:
    """Ссылка на родителя из запроса; None если id не разбирается"""
    if raw in ROOT_ALIASES:
        return ROOT
    parent_id = parse_id(raw)
    return Under(parent_id) if parent_id is not None else None


async def resolve_parent(metadata: MetadataStore, raw_parent) -> ParentRef:
    """Проверяет, что родитель существует и является папкой.

    Корень не требует обращения к хранилищу. Владельца папки не проверяем:
    зная id чужой папки, можно положить в нее свой файл.
    """
    parent = parse_parent_ref(raw_parent)
    if parent is None:
        raise ParentNotFound()
    if parent == ROOT:
        return ROOT

    record = await metadata.find_one(FILES, {"id": parent.id})
    if record is None:
        raise ParentNotFound()
    if record["type"] != FileKind.FOLDER.value:
        raise ParentNotAFolder()
    return parent


def _validate(request: EntryCreate) -> FileKind:
    if not request.name:
        raise MissingName()
    if request.kind not in {kind.value for kind in FileKind}:
        raise InvalidKind()
    kind = FileKind(request.kind)
    if kind != FileKind.FOLDER and not request.data:
        raise MissingData()
    return kind


def _decode(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidData()


async def create_entry(services: Services, owner_id: uuid.UUID, request: EntryCreate) -> FileEntry:
    """Загрузка файла, картинки или создание папки.

    Порядок важен: сначала байты пишутся на диск, потом коммитятся
    метаданные, и только после коммита картинка уходит в очередь миниатюр.
    """
    kind = _validate(request)
    parent = await resolve_parent(services.metadata, request.parent_id)

    record = {
        "owner_id": owner_id,
        "name": request.name,
        "type": kind.value,
        "is_public": bool(request.is_public),
        "parent_id": parent_to_column(parent),
    }

    if kind == FileKind.FOLDER:
        entry_id = await services.metadata.insert(FILES, record)
        logger.info(f"Folder {entry_id} created by {owner_id}")
        return FileEntry.from_record({**record, "id": entry_id})

    content = _decode(request.data)
    # Ключ не зависит от имени: нет коллизий и имя не светится на диске
    local_path = str(uuid.uuid4())

    await services.blobs.ensure_area()
    await services.blobs.write_all(local_path, content)

    record["local_path"] = local_path
    try:
        entry_id = await services.metadata.insert(FILES, record)
    except Exception as e:
        logger.error(f"Metadata commit failed for {local_path}: {str(e)}")
        await services.blobs.discard(local_path)
        raise

    logger.info(f"{kind.value.capitalize()} {entry_id} uploaded by {owner_id} ({len(content)} bytes)")
    entry = FileEntry.from_record({**record, "id": entry_id})

    if kind == FileKind.IMAGE:
        try:
            await services.thumbnail_queue.enqueue(
                {"fileId": str(entry_id), "userId": str(owner_id)}
            )
        except Exception as e:
            logger.error(f"Failed to queue thumbnails for {entry_id}: {str(e)}")

    return entry


async def get_owned_entry(metadata: MetadataStore, owner_id: uuid.UUID, raw_id) -> FileEntry:
    """Запись владельца; чужая и несуществующая одинаково дают NotFound"""
    entry_id = parse_id(raw_id)
    if entry_id is None:
        raise NotFound()
    record = await metadata.find_one(FILES, {"id": entry_id, "owner_id": owner_id})
    if record is None:
        raise NotFound()
    return FileEntry.from_record(record)


def _page_number(raw) -> int:
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(page, 0)


async def list_entries(
    metadata: MetadataStore, owner_id: uuid.UUID, raw_parent=None, raw_page=None
) -> List[FileEntry]:
    """Прямые потомки папки, страницами по PAGE_SIZE в порядке вставки"""
    parent = parse_parent_ref(raw_parent)
    if parent is None:
        return []

    page = _page_number(raw_page)
    records = await metadata.query_page(
        FILES,
        {"owner_id": owner_id, "parent_id": parent_to_column(parent)},
        skip=page * settings.PAGE_SIZE,
        limit=settings.PAGE_SIZE,
    )
    return [FileEntry.from_record(record) for record in records]


async def set_visibility(
    metadata: MetadataStore, owner_id: uuid.UUID, raw_id, is_public: bool
) -> FileEntry:
    """Публикация и снятие с публикации, только для владельца"""
    entry = await get_owned_entry(metadata, owner_id, raw_id)
    await metadata.update_fields(FILES, entry.id, {"is_public": is_public})

    record = await metadata.find_one(FILES, {"id": entry.id})
    if record is None:
        raise NotFound()
    logger.info(f"Entry {entry.id} is_public set to {is_public}")
    return FileEntry.from_record(record)


def can_read(entry: FileEntry, caller_id: Optional[uuid.UUID]) -> bool:
    return entry.is_public or (caller_id is not None and caller_id == entry.owner_id)


def variant_path(entry: FileEntry, size: Optional[str]) -> str:
    """Путь к оригиналу или к миниатюре нужной ширины"""
    if not size:
        return entry.local_path
    if size not in {str(width) for width in settings.THUMBNAIL_SIZES}:
        raise NotFound()
    return f"{entry.local_path}_{size}"


def guess_media_type(name: str) -> str:
    media_type, _ = mimetypes.guess_type(name)
    return media_type or DEFAULT_MEDIA_TYPE


async def open_content(
    services: Services, raw_id, caller_id: Optional[uuid.UUID], size: Optional[str] = None
) -> Tuple[FileEntry, str, AsyncIterator[bytes]]:
    """Содержимое файла с учетом видимости.

    Приватный файл для не-владельца выглядит как несуществующий. Миниатюры
    генерирует воркер асинхронно, поэтому еще не готовая тоже NotFound.
    """
    entry_id = parse_id(raw_id)
    if entry_id is None:
        raise NotFound()

    record = await services.metadata.find_one(FILES, {"id": entry_id})
    if record is None:
        raise NotFound()
    entry = FileEntry.from_record(record)

    if not can_read(entry, caller_id):
        raise NotFound()
    if entry.kind == FileKind.FOLDER:
        raise NoContent()

    path = variant_path(entry, size)
    if not await services.blobs.exists(path):
        raise NotFound()

    return entry, guess_media_type(entry.name), services.blobs.read_stream(path)
