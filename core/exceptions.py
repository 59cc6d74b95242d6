"""Ошибки предметной области.

Каждая ошибка знает свой HTTP-статус и текст, который увидит клиент.
Обработчик в main.py превращает их в ответ вида {"error": "..."}.
"""

from fastapi import status


class FilesManagerError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Bad request"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(FilesManagerError):
    """Нет токена, токен неизвестен или истек: клиент не различает эти случаи"""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class ValidationError(FilesManagerError):
    status_code = status.HTTP_400_BAD_REQUEST


class MissingName(ValidationError):
    message = "Missing name"


class InvalidKind(ValidationError):
    message = "Missing type"


class MissingData(ValidationError):
    message = "Missing data"


class InvalidData(ValidationError):
    message = "Invalid data"


class MissingEmail(ValidationError):
    message = "Missing email"


class MissingPassword(ValidationError):
    message = "Missing password"


class ParentNotFound(FilesManagerError):
    message = "Parent not found"


class ParentNotAFolder(FilesManagerError):
    message = "Parent is not a folder"


class NotFound(FilesManagerError):
    """Не существует, чужой или приватный ресурс: намеренно одна ошибка"""
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class NoContent(FilesManagerError):
    message = "A folder doesn't have content"


class Conflict(FilesManagerError):
    message = "Already exist"


# Поле тела запроса -> ошибка; порядок тот же, что у проверок в сервисах
BODY_FIELD_ERRORS = (
    ("email", MissingEmail),
    ("password", MissingPassword),
    ("name", MissingName),
    ("type", InvalidKind),
    ("data", MissingData),
    ("parentId", ParentNotFound),
)


def error_for_body(errors) -> FilesManagerError:
    """Ошибка валидации тела запроса FastAPI -> ошибка предметной области"""
    fields = {
        error["loc"][1]
        for error in errors
        if len(error["loc"]) > 1 and error["loc"][0] == "body"
    }
    for field, error_class in BODY_FIELD_ERRORS:
        if field in fields:
            return error_class()
    return ValidationError("Invalid request")
