import uuid
from typing import Optional

import bcrypt

from config.settings import settings
from storage.base import SessionStore

# Число раундов bcrypt (в тестах уменьшается)
BCRYPT_ROUNDS = 12

def get_password_hash(password: str) -> str:
    """Генерация хеша пароля"""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())

def _session_key(token: str) -> str:
    return f"{settings.SESSION_KEY_PREFIX}{token}"

async def create_session(sessions: SessionStore, user_id: uuid.UUID) -> str:
    """Создание сессии: случайный токен -> id пользователя на 24 часа"""
    token = str(uuid.uuid4())
    await sessions.put(_session_key(token), str(user_id), settings.SESSION_TTL_SECONDS)
    return token

async def resolve_session(sessions: SessionStore, token: Optional[str]) -> Optional[uuid.UUID]:
    """Возвращает id пользователя по токену или None"""
    if not token:
        return None
    user_id = await sessions.get(_session_key(token))
    if not user_id:
        return None
    try:
        return uuid.UUID(user_id)
    except ValueError:
        return None

async def revoke_session(sessions: SessionStore, token: str) -> None:
    await sessions.delete(_session_key(token))
