from typing import List

from pydantic_settings import BaseSettings
from pydantic import PostgresDsn

class Settings(BaseSettings):
    # Основные настройки приложения
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    STORAGE_DIR: str = "/tmp/files_manager"
    LOG_LEVEL: str = "info"

    # Сессии: токен живет 24 часа
    SESSION_TTL_SECONDS: int = 60 * 60 * 24
    SESSION_KEY_PREFIX: str = "auth_"

    # Листинг
    PAGE_SIZE: int = 20

    # Очереди фоновых задач (обрабатываются воркером)
    THUMBNAIL_QUEUE: str = "fileQueue"
    USER_QUEUE: str = "userQueue"
    THUMBNAIL_SIZES: List[int] = [500, 250, 100]

    # Кеш статистики
    STATS_CACHE_SECONDS: int = 10

    # Настройки PostgreSQL (для Docker)
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "files_manager"

    # Настройки Redis (для Docker)
    REDIS_URL: str = "redis://redis:6379/0"

    @property
    def DATABASE_URL(self) -> PostgresDsn:
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
