from __future__ import annotations

from ..core.exceptions import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamPermissionError,
)


def error_for_status(status_code: int, message: str) -> UpstreamError:
    if status_code == 401:
        return UpstreamAuthError(message, status_code=status_code)
    if status_code == 403:
        return UpstreamPermissionError(message, status_code=status_code)
    if status_code == 404:
        return UpstreamNotFoundError(message, status_code=status_code)
    return UpstreamError(message, status_code=status_code)


def public_message(exc: Exception) -> str:
    """Client-safe description of an upstream failure.

    Hints at the cause without echoing backend payloads, which may quote
    credential material.
    """
    if isinstance(exc, UpstreamAuthError):
        return "Ошибка авторизации в таблице. Проверьте учётные данные сервиса."
    if isinstance(exc, UpstreamPermissionError):
        return "Нет доступа к таблице. Проверьте права сервисного аккаунта."
    if isinstance(exc, UpstreamNotFoundError):
        return "Таблица или лист не найдены."
    return "Ошибка при сохранении данных"
