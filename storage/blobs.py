import logging
from pathlib import Path
from typing import AsyncIterator

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

# Размер куска при отдаче файла
CHUNK_SIZE = 64 * 1024


class LocalByteStorage:
    """Хранилище байтов в локальной папке.

    Файлы адресуются непрозрачными ключами (uuid), а не логическими
    именами. Ключ с путем вне корня считается несуществующим.
    """

    def __init__(self, root: str):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise FileNotFoundError(key)
        return path

    async def ensure_area(self) -> None:
        await aiofiles.os.makedirs(self.root, exist_ok=True)

    async def write_all(self, key: str, data: bytes) -> None:
        async with aiofiles.open(self._path(key), "wb") as f:
            await f.write(data)

    async def exists(self, key: str) -> bool:
        try:
            path = self._path(key)
        except FileNotFoundError:
            return False
        return await aiofiles.os.path.isfile(path)

    async def read_stream(self, key: str) -> AsyncIterator[bytes]:
        async with aiofiles.open(self._path(key), "rb") as f:
            while True:
                chunk = await f.read(CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk

    async def discard(self, key: str) -> None:
        try:
            await aiofiles.os.remove(self._path(key))
        except FileNotFoundError:
            logger.warning(f"Nothing to discard for key {key}")
