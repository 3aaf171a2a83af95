# File: tests/conftest.py
from typing import Dict, List

import pytest

from font_scout.config import ScannerConfig
from font_scout.crawler.models import PageOrigin
from font_scout.logger import configure

PAGE_URL = "https://example.com"


class FakeFetcher:
    """In-memory transport: maps URL -> body and records every request."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch_text(self, url: str) -> str:
        self.calls.append(url)
        return self.pages.get(url, "")


@pytest.fixture(autouse=True)
def reset_logger():
    """
    Keep the project logger quiet between tests; CLI tests point it at
    CliRunner streams that are closed afterwards.
    """
    yield
    configure(level="WARNING")


@pytest.fixture()
def make_fetcher():
    """
    Factory for FakeFetcher instances.
    """
    return FakeFetcher


@pytest.fixture()
def origin() -> PageOrigin:
    return PageOrigin.from_url(PAGE_URL)


@pytest.fixture()
def basic_config() -> ScannerConfig:
    """
    Return a basic valid ScannerConfig for transport tests.
    """
    return ScannerConfig(
        url="http://localhost",
        timeout=5.0,
        user_agent="TestAgent/1.0",
        accept_language="fr-FR,fr;q=0.9",
    )
