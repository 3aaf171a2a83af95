# === FILE: font_scout/scanner.py ===
"""
Модуль-обёртка для функции запуска проверки.
"""
from font_scout.config import ScannerConfig
from font_scout.crawler.fetcher import Fetcher
from font_scout.crawler.models import RunResult
from font_scout.crawler.resolver import Resolver


async def start_scan(cfg: ScannerConfig) -> RunResult:
    """
    Открывает HTTP-сессию, запускает Resolver и возвращает результат.

    Parameters
    ----------
    cfg : ScannerConfig
        Конфигурация проверки.

    Returns
    -------
    RunResult
        Найденные таблицы стилей, файлы шрифтов и вердикт.
    """
    async with Fetcher(cfg) as fetcher:
        resolver = Resolver(fetcher, max_depth=cfg.max_depth, concurrency=cfg.concurrency)
        return await resolver.resolve(cfg.url)

__all__ = ["start_scan"]
