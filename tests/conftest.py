"""Фикстуры тестов: фейковые хранилища и клиент к приложению.

Redis и база подменяются простыми in-memory реализациями тех же
протоколов; байты пишутся в настоящую папку во временном каталоге.
"""

import base64
import copy
import time
import uuid
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend
from httpx import ASGITransport, AsyncClient

from auth import utils as auth_utils
from config.services import Services
from main import create_app
from storage.base import DuplicateRecord
from storage.blobs import LocalByteStorage

# bcrypt с 12 раундами слишком медленный для тестов
auth_utils.BCRYPT_ROUNDS = 4


class FakeSessionStore:
    def __init__(self):
        self.data = {}
        self.healthy = True

    async def put(self, key, value, ttl_seconds):
        self.data[key] = (value, time.monotonic() + ttl_seconds)

    async def get(self, key):
        item = self.data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if time.monotonic() >= expires_at:
            del self.data[key]
            return None
        return value

    async def delete(self, key):
        self.data.pop(key, None)

    async def is_healthy(self):
        return self.healthy

    def expire(self, key):
        value, _ = self.data[key]
        self.data[key] = (value, time.monotonic() - 1)


class FakeMetadataStore:
    """Документное хранилище в памяти, порядок записей = порядок вставки"""

    def __init__(self):
        self.collections = {"users": [], "files": []}
        self.healthy = True
        self.fail_inserts = False
        self.inserted = []
        self._clock = datetime(2026, 1, 1)

    @staticmethod
    def _matches(record, filters):
        return all(record.get(key) == value for key, value in filters.items())

    async def insert(self, collection, record):
        if self.fail_inserts:
            raise RuntimeError("database is down")
        if collection == "users" and await self.find_one("users", {"email": record["email"]}):
            raise DuplicateRecord("users: email")
        self._clock += timedelta(seconds=1)
        stored = {"id": uuid.uuid4(), "created_at": self._clock, **record}
        stored.setdefault("is_public", False)
        stored.setdefault("parent_id", None)
        stored.setdefault("local_path", None)
        self.collections[collection].append(stored)
        self.inserted.append((collection, stored["id"]))
        return stored["id"]

    async def find_one(self, collection, filters):
        for record in self.collections[collection]:
            if self._matches(record, filters):
                return copy.deepcopy(record)
        return None

    async def count(self, collection, filters):
        return sum(1 for record in self.collections[collection] if self._matches(record, filters))

    async def update_fields(self, collection, record_id, fields):
        for record in self.collections[collection]:
            if record["id"] == record_id:
                record.update(fields)

    async def query_page(self, collection, filters, skip, limit):
        matched = [r for r in self.collections[collection] if self._matches(r, filters)]
        return copy.deepcopy(matched[skip:skip + limit])

    async def is_healthy(self):
        return self.healthy

    async def count_users(self):
        return await self.count("users", {})

    async def count_files(self):
        return await self.count("files", {})


class FakeJobQueue:
    def __init__(self):
        self.jobs = []
        self.fail = False

    async def enqueue(self, payload):
        if self.fail:
            raise ConnectionError("queue unavailable")
        self.jobs.append(payload)


def b64(content: bytes) -> str:
    return base64.b64encode(content).decode()


@pytest.fixture
def services(tmp_path):
    return Services(
        sessions=FakeSessionStore(),
        metadata=FakeMetadataStore(),
        blobs=LocalByteStorage(str(tmp_path / "files_manager")),
        thumbnail_queue=FakeJobQueue(),
        user_queue=FakeJobQueue(),
    )


@pytest.fixture
def app(services):
    app = create_app(lifespan=None)
    app.state.services = services
    return app


@pytest_asyncio.fixture
async def async_client(app):
    FastAPICache.init(InMemoryBackend(), prefix="test-cache")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def register_and_connect(client: AsyncClient, email: str, password: str):
    """Регистрирует пользователя и возвращает (id, токен)"""
    response = await client.post("/users", json={"email": email, "password": password})
    assert response.status_code == 201
    user_id = response.json()["id"]

    credentials = base64.b64encode(f"{email}:{password}".encode()).decode()
    response = await client.get("/connect", headers={"Authorization": f"Basic {credentials}"})
    assert response.status_code == 200
    return user_id, response.json()["token"]
