# File: mdrowser/notify.py
"""mdrowser.notify: уведомления пользователя об ошибках и предупреждениях."""

from __future__ import annotations

import logging
from typing import List, Protocol, Tuple

import click

from mdrowser.logger import logger

__all__ = ["Notifier", "ConsoleNotifier", "RecordingNotifier"]

_COLORS = {
    logging.ERROR: "red",
    logging.WARNING: "yellow",
}


class Notifier(Protocol):
    def notify(self, message: str, level: int = logging.INFO) -> None:
        ...


class ConsoleNotifier:
    """Пишет уведомление в stderr с префиксом; в лог только на DEBUG."""

    def __init__(self, prefix: str = "[mdrowser]") -> None:
        self.prefix = prefix

    def notify(self, message: str, level: int = logging.INFO) -> None:
        logger.debug("notify[%s]: %s", logging.getLevelName(level), message)
        text = f"{self.prefix} {message}" if self.prefix else message
        click.secho(text, fg=_COLORS.get(level), err=True)


class RecordingNotifier:
    """Сохраняет уведомления в памяти: для встраивания и тестов."""

    def __init__(self) -> None:
        self.messages: List[Tuple[int, str]] = []

    def notify(self, message: str, level: int = logging.INFO) -> None:
        logger.debug("notify[%s]: %s", logging.getLevelName(level), message)
        self.messages.append((level, message))

    @property
    def errors(self) -> List[str]:
        return [msg for level, msg in self.messages if level >= logging.ERROR]

    @property
    def warnings(self) -> List[str]:
        return [msg for level, msg in self.messages if level == logging.WARNING]
