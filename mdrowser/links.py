# File: mdrowser/links.py
"""mdrowser.links: разбор URL и поиск markdown-ссылок в строке текста."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

__all__: Sequence[str] = (
    "MarkdownLink",
    "trim",
    "extract_domain",
    "iter_links",
    "find_link_at",
)

_HTTP_DOMAIN_RE = re.compile(r"^(https?://[^/\s]+)")
_ANY_DOMAIN_RE = re.compile(r"^([A-Za-z]+://[^/\s]+)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


@dataclass(frozen=True, slots=True)
class MarkdownLink:
    """Ссылка `[text](url)`; start/end — полуоткрытый диапазон в строке."""

    text: str
    url: str
    start: int
    end: int

    def __contains__(self, column: int) -> bool:
        return self.start <= column < self.end


def trim(value: Optional[str]) -> str:
    """None превращается в пустую строку, остальное обрезается по краям."""
    if value is None:
        return ""
    return value.strip()


def extract_domain(url: Optional[str]) -> Optional[str]:
    """Возвращает префикс `scheme://host` или None.

    Сначала пробуем http/https, затем любую буквенную схему.
    """
    if not url:
        return None
    match = _HTTP_DOMAIN_RE.match(url) or _ANY_DOMAIN_RE.match(url)
    return match.group(1) if match else None


def iter_links(line: str) -> Iterator[MarkdownLink]:
    """Все ссылки строки слева направо, без перекрытий."""
    for match in _LINK_RE.finditer(line):
        yield MarkdownLink(match.group(1), match.group(2), match.start(), match.end())


def find_link_at(line: str, column: int) -> Optional[str]:
    """URL первой ссылки, диапазон которой содержит `column` (с нуля)."""
    for link in iter_links(line):
        if column in link:
            return link.url
        if link.start > column:
            break
    return None
