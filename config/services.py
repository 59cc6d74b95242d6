from dataclasses import dataclass

from fastapi import Request

from storage.base import ByteStorage, JobQueue, MetadataStore, SessionStore


@dataclass
class Services:
    """Внешние хранилища, с которыми работает приложение"""
    sessions: SessionStore
    metadata: MetadataStore
    blobs: ByteStorage
    thumbnail_queue: JobQueue
    user_queue: JobQueue


def get_services(request: Request) -> Services:
    """Зависимость FastAPI: хранилища создаются в lifespan и лежат в app.state"""
    return request.app.state.services
