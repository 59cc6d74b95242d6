from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base
from .settings import settings

# Базовый класс для моделей
Base = declarative_base()


def build_engine(url: str = None):
    """Создает движок подключения к БД"""
    return create_async_engine(url or settings.DATABASE_URL, pool_pre_ping=True)


def build_session_factory(engine):
    """Фабрика сессий"""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
