"""Идентификаторы и ссылка на родительскую папку.

Снаружи id приходят строками, внутри живут как uuid.UUID.
Корень пространства имен задается отдельным вариантом ``Root``,
а не строкой "0".
"""

import uuid
from dataclasses import dataclass
from typing import Any, Optional, Union

# Значения, которыми клиент может обозначить корень
ROOT_ALIASES = (None, "", 0, "0")

# Так корень выглядит в ответах API
ROOT_SENTINEL = 0


@dataclass(frozen=True)
class Root:
    pass


@dataclass(frozen=True)
class Under:
    id: uuid.UUID


ParentRef = Union[Root, Under]

ROOT = Root()


def parse_id(value: Any) -> Optional[uuid.UUID]:
    """Разбирает внешний идентификатор, None если он некорректен"""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def format_id(value: Optional[uuid.UUID]) -> Optional[str]:
    return str(value) if value is not None else None


def parent_from_column(value: Optional[uuid.UUID]) -> ParentRef:
    """NULL в колонке parent_id означает корень"""
    return ROOT if value is None else Under(value)


def parent_to_column(parent: ParentRef) -> Optional[uuid.UUID]:
    return parent.id if isinstance(parent, Under) else None


def format_parent(parent: ParentRef):
    """Корень сериализуется как 0, остальное как строка id"""
    if isinstance(parent, Under):
        return str(parent.id)
    return ROOT_SENTINEL
