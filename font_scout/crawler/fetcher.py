# font_scout/crawler/fetcher.py
"""
Fetcher module: HTTP GET with browser-like headers, retry/backoff and soft failures.
"""
from __future__ import annotations

import asyncio
import random
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from font_scout.config import ScannerConfig
from font_scout.logger import logger


class Fetcher:
    """Downloads page, stylesheet and script bodies as text.

    Redirects are followed and gzip/deflate bodies are decompressed by aiohttp.
    Every failure (network error, timeout, non-2xx status) is reported as an
    empty string, never as an exception.
    """

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: ScannerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self.requests = 0

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            timeout = ClientTimeout(total=self.config.timeout) if self.config.timeout else None
            kwargs = {"timeout": timeout} if timeout else {}
            self.session = ClientSession(
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept-Language": self.config.accept_language,
                },
                raise_for_status=False,
                **kwargs,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch_text(self, url: str) -> str:
        """
        Fetch *url* and return its decoded body.

        Returns "" on failure, empty body or non-2xx status.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        attempts = 0
        while True:
            self.requests += 1
            try:
                async with self.session.get(url, allow_redirects=True) as resp:
                    if resp.status in self._RETRY_STATUS:
                        raise ClientError(f"retryable status {resp.status}")
                    if not 200 <= resp.status < 300:
                        logger.debug("HTTP %s for %s", resp.status, url)
                        return ""
                    return await resp.text(errors="replace")
            except asyncio.TimeoutError:
                # no retry on timeout
                logger.debug("Timeout fetching %s", url)
                return ""
            except (ClientError, ValueError) as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    logger.debug("Failed %s: %s", url, exc)
                    return ""
                backoff = min(60, 2**attempts + random.random())
                logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)
