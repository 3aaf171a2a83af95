# File: tests/test_cli.py
"""Тесты для CLI (`font_scout.cli`) с использованием click.testing.CliRunner.
Проверяют вывод отчёта, `--version`, `--help`, JSON-отчёт и обработку ошибок конфига.
"""
import json

import pytest
from click.testing import CliRunner

import font_scout.cli as cli_module
from font_scout.cli import cli
from font_scout.crawler.models import RunResult, Verdict
from font_scout.crawler.resolver import Resolver


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch):
    """Патчим start_scan: возвращает фиктивный результат без сети и запоминает конфиг."""
    seen = {}

    async def fake_scan(cfg):
        seen["config"] = cfg
        return RunResult(
            destination=cfg.url,
            stylesheets={"https://fonts.googleapis.com/css2?family=Barlow"},
            font_files={"https://fonts.gstatic.com/s/barlow/v13/x.ttf"},
            verdict=Verdict.YES,
        )

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return seen


def test_no_arguments_prints_usage():
    result = CliRunner().invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage:" in result.output


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help(flag):
    result = CliRunner().invoke(cli, [flag])
    assert result.exit_code == 0
    assert "--verbose" in result.output


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "FontScout" in result.output


def test_report_on_stdout(patch_start_scan):
    result = CliRunner().invoke(cli, ["example.com"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert "Destination: https://example.com" in lines
    assert "  https://fonts.gstatic.com/s/barlow/v13/x.ttf" in lines
    assert lines[-1] == "GOOGLE_FONTS_PRESENT=YES"
    assert patch_start_scan["config"].max_depth == 4


def test_options_reach_config(patch_start_scan):
    result = CliRunner().invoke(
        cli, ["https://example.com", "--max-depth", "2", "--concurrency", "4", "--timeout", "7.5"]
    )
    assert result.exit_code == 0
    cfg = patch_start_scan["config"]
    assert (cfg.max_depth, cfg.concurrency, cfg.timeout) == (2, 4, 7.5)


def test_unknown_verdict_exits_zero(monkeypatch):
    async def blocked(cfg):
        return RunResult(destination=cfg.url, verdict=Verdict.UNKNOWN)

    monkeypatch.setattr(cli_module, "start_scan", blocked)
    result = CliRunner().invoke(cli, ["https://blocked.example"])
    assert result.exit_code == 0
    assert "Note: Empty response" in result.output
    assert result.output.strip().splitlines()[-1] == "GOOGLE_FONTS_PRESENT=UNKNOWN"


def test_json_file(tmp_path):
    out = tmp_path / "reports" / "fonts.json"
    result = CliRunner().invoke(cli, ["https://example.com", "--json", str(out)])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["verdict"] == "YES"
    assert data["stylesheets"] == ["https://fonts.googleapis.com/css2?family=Barlow"]


def test_config_file_is_used(tmp_path, patch_start_scan):
    cfg_file = tmp_path / "fonts.yaml"
    cfg_file.write_text("user_agent: Agent/2.0\nmax_depth: 3\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "https://example.com"])
    assert result.exit_code == 0
    assert patch_start_scan["config"].user_agent == "Agent/2.0"
    assert patch_start_scan["config"].max_depth == 3


@pytest.mark.parametrize("content", ["key: [unclosed", "wordlists: {}", "max_depth: 0"])
def test_bad_config_file(tmp_path, content):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text(content, encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "https://example.com"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_verbose_progress_lines(monkeypatch, make_fetcher):
    pages = {
        "https://example.com": (
            '<link rel="stylesheet" href="https://fonts.googleapis.com/css?family=A">'
            '<script src="/app.js"></script>'
        ),
        "https://fonts.googleapis.com/css?family=A": "src: url(https://fonts.gstatic.com/s/a/v1/a.woff2);",
    }

    async def scan_with_fake_transport(cfg):
        return await Resolver(make_fetcher(pages), max_depth=cfg.max_depth).resolve(cfg.url)

    monkeypatch.setattr(cli_module, "start_scan", scan_with_fake_transport)
    result = CliRunner().invoke(cli, ["https://example.com", "-v"])
    assert result.exit_code == 0
    assert "[*] Fetching HTML from https://example.com" in result.output
    assert "[*] CSS recursion level 1, 2 URL(s)" in result.output
    assert "[*] Scanning external JS for hidden references" in result.output
    assert "GOOGLE_FONTS_PRESENT=YES" in result.output


def test_quiet_without_verbose(monkeypatch, make_fetcher):
    async def scan_with_fake_transport(cfg):
        return await Resolver(make_fetcher({})).resolve(cfg.url)

    monkeypatch.setattr(cli_module, "start_scan", scan_with_fake_transport)
    result = CliRunner().invoke(cli, ["https://example.com"])
    assert result.exit_code == 0
    assert "[*]" not in result.output
