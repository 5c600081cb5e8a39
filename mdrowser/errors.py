# File: mdrowser/errors.py
"""mdrowser.errors: исключения, которыми сообщают о сбоях загрузки и отображения."""

from __future__ import annotations

__all__ = [
    "MdrowserError",
    "ConfigurationError",
    "InvalidURLError",
    "LaunchError",
    "CommandError",
    "ViewerError",
]


class MdrowserError(Exception):
    """Базовое исключение пакета."""


class ConfigurationError(MdrowserError):
    """Не найдены внешние утилиты: загрузка страниц невозможна."""


class InvalidURLError(MdrowserError):
    """Из URL не удалось выделить `scheme://host`."""

    def __init__(self, url: str) -> None:
        super().__init__("Failed to extract domain from URL")
        self.url = url


class LaunchError(MdrowserError):
    """Конвейер fetch → convert не удалось запустить."""


class CommandError(MdrowserError):
    """Конвейер завершился с ненулевым кодом."""

    def __init__(self, exit_code: int, message: str) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.message = message


class ViewerError(MdrowserError):
    """Запись в буфер, доступный только для чтения, или в закрытое окно."""
