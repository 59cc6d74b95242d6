import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core.ids import ParentRef, ROOT, format_id, format_parent, parent_from_column


class FileKind(str, Enum):
    FOLDER = "folder"
    FILE = "file"
    IMAGE = "image"


# Модели запросов
class UserCreate(BaseModel):
    """Регистрация пользователя. Поля проверяются в сервисе, чтобы вернуть понятную ошибку"""
    email: Optional[str] = None
    password: Optional[str] = None


class EntryCreate(BaseModel):
    """Создание файла, картинки или папки"""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    kind: Optional[str] = Field(None, alias="type")
    is_public: Optional[bool] = Field(False, alias="isPublic")
    parent_id: Optional[Union[str, int]] = Field(None, alias="parentId")
    data: Optional[str] = None  # base64


# Записи из хранилища метаданных
@dataclass(frozen=True)
class UserRecord:
    id: uuid.UUID
    email: str
    hashed_password: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "UserRecord":
        return cls(
            id=record["id"],
            email=record["email"],
            hashed_password=record["hashed_password"],
        )

    def to_public(self) -> Dict[str, Any]:
        return {"id": format_id(self.id), "email": self.email}


@dataclass(frozen=True)
class FileEntry:
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    kind: FileKind
    is_public: bool = False
    parent: ParentRef = ROOT
    local_path: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "FileEntry":
        return cls(
            id=record["id"],
            owner_id=record["owner_id"],
            name=record["name"],
            kind=FileKind(record["type"]),
            is_public=bool(record.get("is_public", False)),
            parent=parent_from_column(record.get("parent_id")),
            local_path=record.get("local_path"),
            created_at=record.get("created_at"),
        )

    def to_public(self) -> Dict[str, Any]:
        """Форма ответа API: единое поле id, корень как 0"""
        payload = {
            "id": format_id(self.id),
            "userId": format_id(self.owner_id),
            "name": self.name,
            "type": self.kind.value,
            "isPublic": self.is_public,
            "parentId": format_parent(self.parent),
        }
        if self.kind != FileKind.FOLDER:
            payload["localPath"] = self.local_path
        return payload
