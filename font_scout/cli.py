# === FILE: font_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска проверки FontScout через командную строку.

Использование:
  font-scout [OPTIONS] URL

Опции:
  -v, --verbose       Печатать ход проверки в stderr ([*] ...)
  --config PATH       YAML/JSON с настройками (user_agent, timeout, ...)
  --max-depth INT     Глубина цепочек @import (по умолчанию 4)
  --concurrency INT   Параллельные загрузки в пределах уровня
  --timeout SEC       Таймаут одного запроса
  --json PATH         Дополнительно сохранить JSON-отчёт
  --log-level LEVEL   Уровень логирования (перекрывает -v)
  --log-file PATH     Файл для логов

Отчёт печатается в stdout; последняя строка —
GOOGLE_FONTS_PRESENT=YES|NO|UNKNOWN. Код выхода 0 во всех этих случаях.

Пример:
  font-scout https://example.com -v --json reports/example.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from font_scout import __version__
from font_scout.config import load_config
from font_scout.logger import configure, init_logging, logger
from font_scout.scanner import start_scan
from font_scout.report.json_report import render_json
from font_scout.report.text_report import render_text

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', message='FontScout, version %(version)s')
@click.argument('url', required=False)
@click.option(
    '--verbose', '-v', 'verbose',
    is_flag=True,
    help='Печатать ход проверки в stderr'
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--max-depth', '-d', 'max_depth',
    type=int,
    default=None,
    help='Глубина цепочек @import (override max_depth)'
)
@click.option(
    '--concurrency', 'concurrency',
    type=int,
    default=None,
    help='Параллельные загрузки в пределах одного уровня'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут одного запроса (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования (перекрывает --verbose)'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов'
)
@click.pass_context
def cli(ctx, url, verbose, config_path, max_depth, concurrency, timeout, json_output,
        log_level, log_file):
    """Проверить, загружает ли страница URL ресурсы Google Fonts."""
    if not url or not url.strip():
        click.echo(ctx.get_usage())
        return

    if log_level:
        configure(level=log_level, log_file=log_file)
    else:
        init_logging(verbose=verbose, log_file=log_file)

    try:
        cfg = load_config(
            config_path,
            url=url,
            max_depth=max_depth,
            concurrency=concurrency,
            timeout=timeout,
        )
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    result = asyncio.run(start_scan(cfg))
    click.echo(render_text(result))

    if json_output:
        try:
            saved_json = render_json(result, json_output)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        logger.info('JSON report: %s', saved_json)


if __name__ == "__main__":
    cli()
