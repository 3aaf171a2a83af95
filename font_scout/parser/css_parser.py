# File: font_scout/parser/css_parser.py
"""font_scout.parser.css_parser: Извлечение @import и ссылок на файлы шрифтов из текста CSS."""

from __future__ import annotations

import re
from typing import Final, List, Sequence

from font_scout.utils import canonical_url

__all__: Sequence[str] = (
    "IMPORT_RE",
    "FONT_FILE_RE",
    "extract_import_targets",
    "extract_font_files",
)

#: ``@import url(...)``, ``@import "..."`` и ``@import '...'``
IMPORT_RE: Final = re.compile(
    r"""@import\s*(?:url\(\s*([^)]*?)\s*\)|"([^"]+)"|'([^']+)')""",
    re.IGNORECASE,
)

#: абсолютные и scheme-relative ссылки на fonts.gstatic.com с расширением шрифта
FONT_FILE_RE: Final = re.compile(
    r"""(?:https?:)?//fonts\.gstatic\.com/[^\s"'`<>()\\,]+\.(?:woff2?|ttf|otf)\b""",
    re.IGNORECASE,
)


def extract_import_targets(css: str) -> List[str]:
    """Возвращает цели всех @import в порядке появления (без нормализации).

    Цели могут быть относительными; кавычки внутри ``url(...)`` снимает
    :func:`font_scout.utils.normalize_url`.

    >>> extract_import_targets('@import url("a.css"); @import \\'b.css\\';')
    ['"a.css"', 'b.css']
    """
    targets: List[str] = []
    for match in IMPORT_RE.finditer(css):
        target = next((g for g in match.groups() if g), "")
        if target.strip():
            targets.append(target.strip())
    return targets


def extract_font_files(css: str) -> List[str]:
    """Находит файлы шрифтов fonts.gstatic.com; ``//host`` дополняется до ``https://``.

    Схема и хост приводятся к нижнему регистру, как в :func:`font_scout.utils.normalize_url`.
    """
    files: List[str] = []
    for match in FONT_FILE_RE.finditer(css):
        url = match.group(0)
        if url.startswith("//"):
            url = f"https:{url}"
        files.append(canonical_url(url))
    return files
