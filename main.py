from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from pathlib import Path
import logging
from redis.asyncio import Redis
from fastapi_cache import FastAPICache
from fastapi_cache.backends.redis import RedisBackend

from config.settings import settings
from config.database import Base, build_engine, build_session_factory
from config.services import Services
from core.exceptions import FilesManagerError, error_for_body
from storage import LocalByteStorage, RedisJobQueue, RedisSessionStore, SqlMetadataStore
from auth.router import router as auth_router
from users.router import router as users_router
from files.router import router as files_router
from system.router import router as system_router

# Настройка логгера
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Обработчик событий жизненного цикла приложения"""
    # Startup логика
    try:
        # Создаем папку для файлов
        storage_path = Path(settings.STORAGE_DIR)
        storage_path.mkdir(exist_ok=True, parents=True)
        logger.info(f"Storage directory ready at: {storage_path.absolute()}")

        # Инициализация БД
        engine = build_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

        # Сессии, очереди и кеш живут в Valkey (Redis-совместимый)
        redis = Redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5
        )

        try:
            if await redis.ping():
                logger.info("Successfully connected to Valkey server")
                FastAPICache.init(RedisBackend(redis), prefix="fastapi-cache")
        except Exception as e:
            logger.error(f"Failed to connect to Valkey: {str(e)}")
            raise

        app.state.services = Services(
            sessions=RedisSessionStore(redis),
            metadata=SqlMetadataStore(build_session_factory(engine)),
            blobs=LocalByteStorage(settings.STORAGE_DIR),
            thumbnail_queue=RedisJobQueue(redis, settings.THUMBNAIL_QUEUE),
            user_queue=RedisJobQueue(redis, settings.USER_QUEUE),
        )

    except Exception as e:
        logger.error(f"Startup error: {str(e)}")
        raise

    yield  # Приложение работает

    # Shutdown логика
    await redis.aclose()
    await engine.dispose()
    logger.info("Connections closed")

async def handle_files_manager_error(request: Request, exc: FilesManagerError):
    """Ошибки предметной области -> {"error": "..."} с нужным статусом"""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Невалидное тело запроса отвечает той же ошибкой, что и проверка в сервисе"""
    return await handle_files_manager_error(request, error_for_body(exc.errors()))

def create_app(lifespan=lifespan) -> FastAPI:
    app = FastAPI(
        title="Files Manager API",
        version="1.0.0",
        lifespan=lifespan
    )
    app.add_exception_handler(FilesManagerError, handle_files_manager_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # Подключение роутеров
    app.include_router(system_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(files_router)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL
    )
