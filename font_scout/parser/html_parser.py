# === FILE: font_scout/parser/html_parser.py ===
"""HTML and free-text scanning helpers for FontScout.

Every function here works on text that already went through
:func:`font_scout.decoder.decode`. Tags are located with patterns rather than
a full DOM walk, because the interesting ``<link>``/``<script>`` markup is
often built inside JavaScript strings where an HTML parser would treat it as
opaque script text. Once a tag is found, its attributes are parsed with
BeautifulSoup so quoting, casing and multi-valued ``rel`` behave like in a
browser.

* :func:`extract_stylesheet_links` — ``href`` of ``<link rel="stylesheet">``.
* :func:`extract_script_sources` — ``src`` of ``<script>``.
* :func:`extract_inline_imports` — absolute ``@import`` targets in the page.
* :func:`extract_stylesheet_references` — any fonts.googleapis.com URL.
* :func:`extract_google_references` — the combined page + script rescan.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from font_scout.parser.css_parser import IMPORT_RE, extract_font_files
from font_scout.utils import canonical_url, is_font_file_url, is_font_stylesheet_url

__all__: Sequence[str] = (
    "extract_stylesheet_links",
    "extract_script_sources",
    "extract_inline_imports",
    "extract_stylesheet_references",
    "extract_google_references",
)

_LINK_TAG_RE: Final = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
_SCRIPT_TAG_RE: Final = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
_ABSOLUTE_RE: Final = re.compile(r"^https?://", re.IGNORECASE)
_STYLESHEET_REF_RE: Final = re.compile(
    r"""(?:https?:)?//fonts\.googleapis\.com/[^\s"'`<>()\\]+""",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Tag helpers
# ---------------------------------------------------------------------------


def _parse_tag(markup: str, name: str) -> Optional[Tag]:
    # markup copied out of JS strings keeps its escaped quotes
    markup = markup.replace('\\"', '"').replace("\\'", "'")
    tag = BeautifulSoup(markup, "html.parser").find(name)
    return tag if isinstance(tag, Tag) else None


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if isinstance(value, str) else ""


def _is_stylesheet(tag: Tag) -> bool:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return any(r.lower() == "stylesheet" for r in rel)


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------


def extract_stylesheet_links(html: str) -> List[str]:
    """Return the ``href`` of every ``<link>`` whose ``rel`` includes ``stylesheet``."""
    hrefs: List[str] = []
    for match in _LINK_TAG_RE.finditer(html):
        tag = _parse_tag(match.group(0), "link")
        if tag is None or not _is_stylesheet(tag):
            continue
        href = _attr(tag, "href")
        if href:
            hrefs.append(href)
    return hrefs


def extract_script_sources(html: str) -> List[str]:
    """Return the ``src`` of every external ``<script>``."""
    sources: List[str] = []
    for match in _SCRIPT_TAG_RE.finditer(html):
        tag = _parse_tag(match.group(0), "script")
        if tag is None:
            continue
        src = _attr(tag, "src")
        if src:
            sources.append(src)
    return sources


def extract_inline_imports(html: str) -> List[str]:
    """Absolute targets of ``@import`` rules written inline in the page.

    Relative targets are ignored here: they only make sense against the
    stylesheet that contains them, which the page itself is not.
    """
    targets: List[str] = []
    for match in IMPORT_RE.finditer(html):
        target = next((g for g in match.groups() if g), "").strip().strip("\"'").strip()
        if _ABSOLUTE_RE.match(target):
            targets.append(target)
    return targets


def extract_stylesheet_references(text: str) -> List[str]:
    """Any fonts.googleapis.com URL in *text*, absolute or scheme-relative.

    Covers stylesheets injected by inline scripts, where no ``<link>`` tag
    exists in the static markup. Scheme and host come back lower-cased so the
    results compare equal to :func:`font_scout.utils.normalize_url` output.
    """
    refs: List[str] = []
    for match in _STYLESHEET_REF_RE.finditer(text):
        url = match.group(0).rstrip(".,;")
        if url.startswith("//"):
            url = f"https:{url}"
        refs.append(canonical_url(url))
    return refs


def extract_google_references(text: str) -> Tuple[List[str], List[str]]:
    """Rescan *text* for both Google Fonts domains.

    Returns ``(stylesheets, font_files)``; every URL is absolute and passed
    through the domain (and, for fonts, extension) filter.
    """
    stylesheets = [u for u in extract_stylesheet_references(text) if is_font_stylesheet_url(u)]
    font_files = [u for u in extract_font_files(text) if is_font_file_url(u)]
    return stylesheets, font_files
