import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from models.user import User
from models.file import FileModel
from .base import DuplicateRecord

logger = logging.getLogger(__name__)

# Коллекции и их таблицы
COLLECTIONS = {
    "users": User,
    "files": FileModel,
}


def _to_record(obj) -> Dict[str, Any]:
    return {column.key: getattr(obj, column.key) for column in obj.__table__.columns}


class SqlMetadataStore:
    """Хранилище метаданных поверх SQLAlchemy.

    Снаружи выглядит как документное хранилище: коллекция, фильтр-словарь,
    записи-словари. Каждая операция идет в своей сессии.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    @staticmethod
    def _model(collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}")

    async def insert(self, collection: str, record: Dict[str, Any]) -> uuid.UUID:
        model = self._model(collection)
        async with self._session_factory() as session:
            obj = model(**record)
            session.add(obj)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateRecord(f"{collection}: {e.orig}") from e
            except SQLAlchemyError:
                await session.rollback()
                raise
            await session.refresh(obj)
            return obj.id

    async def find_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        model = self._model(collection)
        async with self._session_factory() as session:
            result = await session.execute(select(model).filter_by(**filters).limit(1))
            obj = result.scalars().first()
            return _to_record(obj) if obj is not None else None

    async def count(self, collection: str, filters: Dict[str, Any]) -> int:
        model = self._model(collection)
        async with self._session_factory() as session:
            stmt = select(func.count()).select_from(model).filter_by(**filters)
            return (await session.execute(stmt)).scalar_one()

    async def update_fields(self, collection: str, record_id: uuid.UUID, fields: Dict[str, Any]) -> None:
        model = self._model(collection)
        async with self._session_factory() as session:
            await session.execute(update(model).where(model.id == record_id).values(**fields))
            await session.commit()

    async def query_page(
        self, collection: str, filters: Dict[str, Any], skip: int, limit: int
    ) -> List[Dict[str, Any]]:
        model = self._model(collection)
        async with self._session_factory() as session:
            stmt = (
                select(model)
                .filter_by(**filters)
                .order_by(model.created_at, model.id)
                .offset(skip)
                .limit(limit)
            )
            result = await session.execute(stmt)
            return [_to_record(obj) for obj in result.scalars().all()]

    async def is_healthy(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    async def count_users(self) -> int:
        return await self.count("users", {})

    async def count_files(self) -> int:
        return await self.count("files", {})
