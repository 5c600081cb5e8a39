# File: mdrowser/browser.py
"""mdrowser.browser: fetch-and-render, связывающий конвейер, вьювер и уведомления."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Set

from mdrowser.config import BrowserConfig
from mdrowser.dispatch import LoopDispatcher
from mdrowser.links import extract_domain, find_link_at, trim
from mdrowser.logger import logger
from mdrowser.notify import ConsoleNotifier, Notifier
from mdrowser.pipeline import MarkdownPipeline
from mdrowser.viewer import OutputSink

__all__ = ["Browser"]


class Browser:
    """Фасад для CLI и тестов: запуск загрузки и доставка результата во вьювер.

    Все зависимости передаются явно; вьювер трогается только из вызовов,
    запланированных через dispatcher.
    """

    def __init__(
        self,
        config: BrowserConfig,
        sink: OutputSink,
        notifier: Optional[Notifier] = None,
        pipeline: Optional[MarkdownPipeline] = None,
        dispatcher: Optional[LoopDispatcher] = None,
    ) -> None:
        self.config = config
        self.sink = sink
        self.notifier = notifier or ConsoleNotifier(config.notify_prefix)
        self.pipeline = pipeline or MarkdownPipeline(config)
        self.dispatcher = dispatcher or LoopDispatcher()
        self.last_lines: Optional[List[str]] = None
        self._pending: Set[asyncio.Task] = set()

    def fetch(self, url: Optional[str]) -> Optional[asyncio.Task]:
        """
        Запускает загрузку и сразу возвращает задачу.

        Пустой ввод молча игнорируется, URL без `scheme://host` даёт
        уведомление об ошибке; в обоих случаях процессы не запускаются.
        """
        cleaned = trim(url)
        if cleaned == "":
            return None

        domain = extract_domain(cleaned)
        if not domain:
            self.notifier.notify("Failed to extract domain from URL", logging.ERROR)
            return None

        logger.info("Fetching %s (domain %s)", cleaned, domain)
        task = asyncio.get_running_loop().create_task(self.pipeline.run(cleaned, domain))
        self._pending.add(task)
        task.add_done_callback(self._on_complete)
        return task

    def follow(self, line: str, column: int) -> Optional[asyncio.Task]:
        """Загружает ссылку `[text](url)` под курсором (столбец с нуля)."""
        url = find_link_at(line, column)
        if not url or trim(url) == "":
            self.notifier.notify("No markdown link under cursor", logging.WARNING)
            return None
        return self.fetch(url)

    async def drain(self) -> None:
        """Ждёт все начатые загрузки и их отображение."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
        await self.dispatcher.idle()

    def _on_complete(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.dispatcher.schedule(self.notifier.notify, str(exc), logging.ERROR)
            return
        self.dispatcher.schedule(self._display, task.result())

    def _display(self, lines: List[str]) -> None:
        self.sink.write(lines)
        self.last_lines = lines
