"""Тесты локального хранилища байтов."""

import pytest

from storage.blobs import LocalByteStorage


@pytest.fixture
def blobs(tmp_path):
    return LocalByteStorage(str(tmp_path / "area"))


@pytest.mark.asyncio
class TestLocalByteStorage:
    async def test_ensure_area_is_idempotent(self, blobs, tmp_path):
        await blobs.ensure_area()
        await blobs.ensure_area()

        assert (tmp_path / "area").is_dir()

    async def test_write_read_discard(self, blobs):
        await blobs.ensure_area()
        content = b"x" * 200_000

        await blobs.write_all("key", content)

        assert await blobs.exists("key")
        assert b"".join([chunk async for chunk in blobs.read_stream("key")]) == content

        await blobs.discard("key")
        assert not await blobs.exists("key")

    async def test_discard_missing_key(self, blobs):
        await blobs.ensure_area()

        await blobs.discard("missing")

    async def test_keys_outside_area_do_not_exist(self, blobs, tmp_path):
        await blobs.ensure_area()
        (tmp_path / "secret").write_bytes(b"nope")

        assert not await blobs.exists("../secret")
        with pytest.raises(FileNotFoundError):
            await blobs.write_all("../escape", b"x")
