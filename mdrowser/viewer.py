# File: mdrowser/viewer.py
"""mdrowser.viewer: переиспользуемая поверхность просмотра (буфер + окно)."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from mdrowser.errors import ViewerError
from mdrowser.logger import logger

__all__ = ["Buffer", "Window", "OutputSink", "ViewerSurface"]

_ids = itertools.count(1)


@dataclass
class Buffer:
    """Scratch-буфер с markdown: не связан с файлом, стирается при закрытии окна."""

    id: int = field(default_factory=lambda: next(_ids))
    lines: List[str] = field(default_factory=lambda: [""])
    filetype: str = "markdown"
    modifiable: bool = True
    modified: bool = False
    valid: bool = True

    def set_lines(self, lines: Sequence[str]) -> None:
        if not self.valid:
            raise ViewerError(f"Buffer {self.id} was wiped")
        if not self.modifiable:
            raise ViewerError(f"Buffer {self.id} is read-only")
        self.lines = list(lines) or [""]
        self.modified = True

    def wipe(self) -> None:
        self.valid = False
        self.lines = []


@dataclass
class Window:
    id: int = field(default_factory=lambda: next(_ids))
    buffer: Optional[Buffer] = None
    valid: bool = True

    def close(self) -> None:
        self.valid = False
        self.buffer = None


class OutputSink(Protocol):
    """Куда Browser пишет результат."""

    def ensure(self) -> Tuple[Buffer, Window]:
        ...

    def write(self, lines: Sequence[str]) -> None:
        ...


class ViewerSurface:
    """
    Одна пара буфер/окно на все вызовы.

    Если буфер стёрт, создаётся новый (и новое окно); если закрыто только
    окно, открывается новое для прежнего буфера. После записи буфер
    только для чтения и без несохранённых изменений. `render`, если задан,
    получает строки после каждой записи (CLI печатает их в терминал).
    """

    def __init__(self, render: Optional[Callable[[List[str]], None]] = None) -> None:
        self.buffer: Optional[Buffer] = None
        self.window: Optional[Window] = None
        self._render = render

    def ensure(self) -> Tuple[Buffer, Window]:
        if not (self.buffer and self.buffer.valid):
            self.buffer = Buffer()
            self.window = None
            logger.debug("Created viewer buffer %s", self.buffer.id)

        if not (self.window and self.window.valid):
            self.window = Window()
            logger.debug("Opened viewer window %s", self.window.id)

        self.window.buffer = self.buffer
        return self.buffer, self.window

    def write(self, lines: Sequence[str]) -> None:
        buffer, _ = self.ensure()
        buffer.modifiable = True
        buffer.set_lines(lines)
        buffer.modifiable = False
        buffer.modified = False
        if self._render is not None:
            self._render(list(buffer.lines))

    def close(self) -> None:
        """Закрывает окно; буфер стирается вместе с ним."""
        if self.window is not None:
            self.window.close()
        if self.buffer is not None:
            self.buffer.wipe()

    def line_at(self, row: int) -> Optional[str]:
        """Строка буфера по индексу с нуля, если поверхность жива."""
        if not (self.buffer and self.buffer.valid):
            return None
        if 0 <= row < len(self.buffer.lines):
            return self.buffer.lines[row]
        return None
