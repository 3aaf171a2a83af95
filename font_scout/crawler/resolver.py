# === FILE: font_scout/crawler/resolver.py ===
from __future__ import annotations

import asyncio
from typing import List, Protocol

from font_scout.crawler.models import PageOrigin, ResolveContext, RunResult, Verdict
from font_scout.decoder import decode
from font_scout.logger import logger
from font_scout.parser.css_parser import extract_font_files, extract_import_targets
from font_scout.parser.html_parser import (
    extract_google_references,
    extract_inline_imports,
    extract_script_sources,
    extract_stylesheet_links,
    extract_stylesheet_references,
)
from font_scout.utils import (
    is_font_file_url,
    is_font_stylesheet_url,
    normalize_url,
    remove_duplicates,
)

__all__ = ("TextFetcher", "Resolver", "MAX_DEPTH")

MAX_DEPTH = 4


class TextFetcher(Protocol):
    async def fetch_text(self, url: str) -> str: ...


class Resolver:
    """Follows stylesheet ``@import`` chains from one page and collects Google Fonts hits.

    A run fetches the page, seeds a work queue from its ``<link>`` tags,
    inline ``@import`` rules and any fonts.googleapis.com reference, then
    walks the queue level by level up to ``max_depth``. Linked external
    scripts are rescanned afterwards, because font loading is often injected
    by client-side code rather than declared in markup.
    """

    def __init__(self, fetcher: TextFetcher, max_depth: int = MAX_DEPTH, concurrency: int = 1) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.fetcher = fetcher
        self.max_depth = max_depth
        self.concurrency = concurrency

    async def resolve(self, page_url: str) -> RunResult:
        logger.info("Fetching HTML from %s", page_url)
        raw_html = await self.fetcher.fetch_text(page_url)
        if not raw_html or not raw_html.strip():
            logger.info("Empty response from %s", page_url)
            return RunResult(destination=page_url, verdict=Verdict.UNKNOWN)

        ctx = ResolveContext(origin=PageOrigin.from_url(page_url))
        html = decode(raw_html)

        await self._follow_imports(ctx, self._seed(html, ctx.origin))
        await self._scan_scripts(ctx, html)

        result = ctx.to_result(page_url)
        logger.debug(
            "Done: %d fetch(es), %d stylesheet(s), %d font file(s), verdict %s",
            ctx.fetches,
            len(result.stylesheets),
            len(result.font_files),
            result.verdict.value,
        )
        return result

    # ------------------------------------------------------------------ seed

    @staticmethod
    def _seed(html: str, origin: PageOrigin) -> List[str]:
        raw = (
            extract_stylesheet_links(html)
            + extract_inline_imports(html)
            + extract_stylesheet_references(html)
        )
        return [url for url in (normalize_url(r, origin) for r in raw) if url]

    # ------------------------------------------------------- recursion loop

    async def _follow_imports(self, ctx: ResolveContext, queue: List[str]) -> None:
        depth = 0
        while queue and depth < self.max_depth:
            depth += 1
            logger.info("CSS recursion level %d, %d URL(s)", depth, len(queue))
            pending = [url for url in remove_duplicates(queue) if url not in ctx.visited]
            ctx.visited.update(pending)

            bodies = await self._fetch_all(ctx, pending)
            next_queue: List[str] = []
            for url, body in zip(pending, bodies):
                if body:
                    next_queue.extend(self._process_stylesheet(ctx, url, body))
            queue = next_queue

        if queue:
            logger.debug("Depth limit %d reached, %d URL(s) not followed", self.max_depth, len(queue))

    def _process_stylesheet(self, ctx: ResolveContext, url: str, body: str) -> List[str]:
        """Record hits found in one fetched stylesheet; return its normalized imports."""
        css = decode(body)
        if is_font_stylesheet_url(url):
            ctx.stylesheets.add(url)
        ctx.font_files.update(f for f in extract_font_files(css) if is_font_file_url(f))
        imports = (normalize_url(t, ctx.origin) for t in extract_import_targets(css))
        return [u for u in imports if u]

    async def _fetch_all(self, ctx: ResolveContext, urls: List[str]) -> List[str]:
        if self.concurrency == 1:
            return [await self._fetch(ctx, url) for url in urls]

        semaphore = asyncio.Semaphore(self.concurrency)

        async def _limited(url: str) -> str:
            async with semaphore:
                return await self._fetch(ctx, url)

        return list(await asyncio.gather(*(_limited(u) for u in urls)))

    async def _fetch(self, ctx: ResolveContext, url: str) -> str:
        ctx.fetches += 1
        body = await self.fetcher.fetch_text(url)
        if not body:
            logger.debug("Skipping %s: empty response", url)
        return body or ""

    # --------------------------------------------------------- script rescan

    async def _scan_scripts(self, ctx: ResolveContext, html: str) -> None:
        scripts = remove_duplicates(
            [u for u in (normalize_url(s, ctx.origin) for s in extract_script_sources(html)) if u]
        )
        if scripts:
            logger.info("Scanning external JS for hidden references")

        bodies = await self._fetch_all(ctx, scripts)
        combined = "\n".join([html] + [decode(b) for b in bodies if b])
        stylesheets, font_files = extract_google_references(combined)
        ctx.stylesheets.update(stylesheets)
        ctx.font_files.update(font_files)

