"""Интерфейсы внешних хранилищ.

Ядро работает только с этими протоколами; реальные реализации
(Redis, SQLAlchemy, локальный диск) создаются при старте приложения,
в тестах подставляются фейки.
"""

import uuid
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol

Record = Dict[str, Any]


class DuplicateRecord(Exception):
    """Запись нарушает ограничение уникальности"""


class SessionStore(Protocol):
    async def put(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def get(self, key: str) -> Optional[str]: ...

    async def delete(self, key: str) -> None: ...

    async def is_healthy(self) -> bool: ...


class MetadataStore(Protocol):
    async def insert(self, collection: str, record: Record) -> uuid.UUID: ...

    async def find_one(self, collection: str, filters: Record) -> Optional[Record]: ...

    async def count(self, collection: str, filters: Record) -> int: ...

    async def update_fields(self, collection: str, record_id: uuid.UUID, fields: Record) -> None: ...

    async def query_page(
        self, collection: str, filters: Record, skip: int, limit: int
    ) -> List[Record]: ...

    async def is_healthy(self) -> bool: ...

    async def count_users(self) -> int: ...

    async def count_files(self) -> int: ...


class ByteStorage(Protocol):
    async def ensure_area(self) -> None: ...

    async def write_all(self, key: str, data: bytes) -> None: ...

    async def exists(self, key: str) -> bool: ...

    def read_stream(self, key: str) -> AsyncIterator[bytes]: ...

    async def discard(self, key: str) -> None: ...


class JobQueue(Protocol):
    async def enqueue(self, payload: Record) -> None: ...
