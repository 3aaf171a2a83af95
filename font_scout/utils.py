# File: font_scout/utils.py
"""font_scout.utils: Нормализация URL относительно страницы и прочие мелкие утилиты."""

from __future__ import annotations

from typing import Collection, Final, List, Optional, Sequence
from urllib.parse import urlsplit

from font_scout.crawler.models import PageOrigin
from font_scout.logger import logger

__all__: Sequence[str] = (
    "FONT_STYLESHEET_HOST",
    "FONT_ASSET_HOST",
    "FONT_EXTENSIONS",
    "strip_css_url",
    "canonical_url",
    "normalize_url",
    "host_of",
    "is_font_stylesheet_url",
    "is_font_file_url",
    "remove_duplicates",
)

FONT_STYLESHEET_HOST: Final[str] = "fonts.googleapis.com"
FONT_ASSET_HOST: Final[str] = "fonts.gstatic.com"
FONT_EXTENSIONS: Final[tuple[str, ...]] = (".woff", ".woff2", ".ttf", ".otf")

_SKIPPED_SCHEMES: Final[tuple[str, ...]] = ("data:", "javascript:", "mailto:", "blob:", "about:")
_QUOTES: Final[str] = "\"'"


def strip_css_url(raw: str) -> str:
    """Снимает обёртку ``url(...)``, кавычки и пробелы вокруг значения."""
    value = raw.strip()
    if value[:4].lower() == "url(":
        value = value[4:]
        if value.endswith(")"):
            value = value[:-1]
        value = value.strip()
    if value[:1] in _QUOTES:
        value = value[1:]
    if value[-1:] in _QUOTES:
        value = value[:-1]
    return value.strip()


def canonical_url(url: str) -> str:
    """Приводит схему и хост абсолютного URL к нижнему регистру."""
    scheme, sep, rest = url.partition("://")
    end = len(rest)
    for delim in "/?#":
        pos = rest.find(delim)
        if pos != -1:
            end = min(end, pos)
    return f"{scheme.lower()}{sep}{rest[:end].lower()}{rest[end:]}"


def normalize_url(raw: str, origin: PageOrigin) -> Optional[str]:
    """Делает из ссылки абсолютный URL относительно origin страницы.

    ``//host/x`` всегда получает ``https:``; ``/x`` и ``x`` — схему и хост
    origin. Пути с ``../`` не разворачиваются. Пустые значения и ссылки
    вида ``data:`` / ``javascript:`` дают None.
    """
    value = strip_css_url(raw)
    if not value:
        return None
    lowered = value.lower()
    if lowered.startswith(_SKIPPED_SCHEMES):
        logger.debug("Skipping non-fetchable reference: %s", value[:80])
        return None
    if lowered.startswith(("http://", "https://")):
        return canonical_url(value)
    if value.startswith("//"):
        return canonical_url(f"https:{value}")
    if value.startswith("/"):
        return f"{origin}{value}"
    return f"{origin}/{value}"


def host_of(url: str) -> str:
    """Возвращает имя хоста без порта в нижнем регистре ('' если его нет)."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def is_font_stylesheet_url(url: str) -> bool:
    return host_of(url) == FONT_STYLESHEET_HOST


def is_font_file_url(url: str) -> bool:
    if host_of(url) != FONT_ASSET_HOST:
        return False
    return urlsplit(url).path.lower().endswith(FONT_EXTENSIONS)


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
