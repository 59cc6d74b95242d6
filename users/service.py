import logging
import uuid
from typing import Optional

from auth.utils import get_password_hash, verify_password
from config.services import Services
from core.exceptions import Conflict, MissingEmail, MissingPassword
from models.schemas import UserCreate, UserRecord
from storage.base import DuplicateRecord

logger = logging.getLogger(__name__)


async def get_user_by_email(services: Services, email: str) -> Optional[UserRecord]:
    record = await services.metadata.find_one("users", {"email": email})
    return UserRecord.from_record(record) if record else None


async def get_user(services: Services, user_id: uuid.UUID) -> Optional[UserRecord]:
    record = await services.metadata.find_one("users", {"id": user_id})
    return UserRecord.from_record(record) if record else None


async def create_user(services: Services, user_data: UserCreate) -> UserRecord:
    """Регистрация: email уникален, пароль хранится только как хеш"""
    if not user_data.email:
        raise MissingEmail()
    if not user_data.password:
        raise MissingPassword()

    if await get_user_by_email(services, user_data.email):
        raise Conflict()

    hashed_password = get_password_hash(user_data.password)
    try:
        user_id = await services.metadata.insert(
            "users", {"email": user_data.email, "hashed_password": hashed_password}
        )
    except DuplicateRecord:
        # Параллельная регистрация успела первой
        raise Conflict()
    logger.info(f"User {user_id} registered")

    # Письмо приветствия отправляет воркер; его сбой регистрацию не отменяет
    try:
        await services.user_queue.enqueue({"userId": str(user_id)})
    except Exception as e:
        logger.error(f"Failed to queue welcome job for user {user_id}: {str(e)}")

    return UserRecord(id=user_id, email=user_data.email, hashed_password=hashed_password)


async def authenticate(services: Services, email: str, password: str) -> Optional[UserRecord]:
    """Проверяет email и пароль, None если что-то не так"""
    if not email or not password:
        return None
    user = await get_user_by_email(services, email)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user
