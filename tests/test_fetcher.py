# File: tests/test_fetcher.py
# Transport tests against a local aiohttp server
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from font_scout.config import ScannerConfig
from font_scout.crawler.fetcher import Fetcher
from font_scout.crawler.models import Verdict
from font_scout.scanner import start_scan

#: body long enough for the server to bother compressing it
LONG_CSS: str = "@font-face { src: url(https://fonts.gstatic.com/s/a/v1/a.woff2); }\n" * 200


# --------------------------------------------------------------------------- #
#                               Helper utilities                              #
# --------------------------------------------------------------------------- #


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def css_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_headers(request):
        return web.Response(
            text=f"{request.headers.get('User-Agent')}|{request.headers.get('Accept-Language')}"
        )

    async def handle_redirect(_):
        raise web.HTTPFound("/target.css")

    async def handle_target(_):
        return web.Response(text="landed", content_type="text/css")

    async def handle_gzip(_):
        resp = web.Response(text=LONG_CSS, content_type="text/css")
        resp.enable_compression()
        return resp

    async def handle_page(_):
        return web.Response(
            text='<html><link rel="stylesheet" href="/main.css"></html>', content_type="text/html"
        )

    async def handle_main_css(_):
        return web.Response(
            text="@import url(fonts.css); body { margin: 0 }", content_type="text/css"
        )

    async def handle_fonts_css(_):
        return web.Response(
            text="src: url(//fonts.gstatic.com/s/local/v1/l.woff2);", content_type="text/css"
        )

    async def handle_missing(_):
        return web.Response(status=404, text="not here")

    async def handle_error(_):
        return web.Response(status=503, text="try later")

    app.router.add_get("/", handle_page)
    app.router.add_get("/main.css", handle_main_css)
    app.router.add_get("/fonts.css", handle_fonts_css)
    app.router.add_get("/headers", handle_headers)
    app.router.add_get("/redirect.css", handle_redirect)
    app.router.add_get("/target.css", handle_target)
    app.router.add_get("/gzip.css", handle_gzip)
    app.router.add_get("/missing.css", handle_missing)
    app.router.add_get("/error.css", handle_error)

    async for url in _serve_app(app, unused_tcp_port):
        yield url


# --------------------------------------------------------------------------- #
#                                   Tests                                     #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_sends_configured_headers(basic_config, css_server: str):
    async with Fetcher(basic_config) as fetcher:
        body = await fetcher.fetch_text(f"{css_server}/headers")
    assert body == "TestAgent/1.0|fr-FR,fr;q=0.9"


@pytest.mark.asyncio()
async def test_follows_redirects(basic_config, css_server: str):
    async with Fetcher(basic_config) as fetcher:
        assert await fetcher.fetch_text(f"{css_server}/redirect.css") == "landed"


@pytest.mark.asyncio()
async def test_decompresses_body(basic_config, css_server: str):
    async with Fetcher(basic_config) as fetcher:
        assert await fetcher.fetch_text(f"{css_server}/gzip.css") == LONG_CSS


@pytest.mark.asyncio()
async def test_non_2xx_is_empty(basic_config, css_server: str):
    async with Fetcher(basic_config) as fetcher:
        assert await fetcher.fetch_text(f"{css_server}/missing.css") == ""
        assert await fetcher.fetch_text(f"{css_server}/error.css") == ""
        assert fetcher.requests == 2


@pytest.mark.asyncio()
async def test_connection_error_is_empty(basic_config, unused_tcp_port: int):
    # nothing listens on the port
    async with Fetcher(basic_config) as fetcher:
        assert await fetcher.fetch_text(f"http://localhost:{unused_tcp_port}/x.css") == ""


@pytest.mark.asyncio()
async def test_session_closed_on_exit(basic_config):
    fetcher = Fetcher(basic_config)
    async with fetcher:
        assert fetcher.session is not None
    assert fetcher.session.closed


@pytest.mark.asyncio()
async def test_fetch_without_session_raises(basic_config):
    with pytest.raises(RuntimeError):
        await Fetcher(basic_config).fetch_text("http://localhost/")


@pytest.mark.asyncio()
async def test_start_scan_over_http(css_server: str):
    cfg = ScannerConfig(url=f"{css_server}/", timeout=5.0)
    result = await start_scan(cfg)

    assert result.verdict is Verdict.YES
    assert result.stylesheets == set()
    assert result.font_files == {"https://fonts.gstatic.com/s/local/v1/l.woff2"}


@pytest.mark.asyncio()
async def test_start_scan_unreachable_is_unknown(unused_tcp_port: int):
    cfg = ScannerConfig(url=f"http://localhost:{unused_tcp_port}/", timeout=5.0)
    result = await start_scan(cfg)

    assert result.verdict is Verdict.UNKNOWN
