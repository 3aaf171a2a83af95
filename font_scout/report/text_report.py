# File: font_scout/report/text_report.py
"""font_scout.report.text_report: Текстовый отчёт для stdout, рендерится через Jinja2."""

from __future__ import annotations

from functools import lru_cache

from jinja2 import Environment, PackageLoader, Template, select_autoescape

from font_scout.crawler.models import RunResult


@lru_cache(maxsize=1)
def _template() -> Template:
    env = Environment(
        loader=PackageLoader("font_scout", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return env.get_template("report.txt.j2")


def render_text(result: RunResult) -> str:
    """Рендерит отчёт в фиксированном формате.

    Последняя строка всегда ``GOOGLE_FONTS_PRESENT=YES|NO|UNKNOWN`` —
    её разбирают вызывающие скрипты.

    Пример:
    ```python
    from font_scout.report.text_report import render_text
    print(render_text(result))
    ```
    """
    return _template().render(
        destination=result.destination,
        stylesheets=result.sorted_stylesheets,
        font_files=result.sorted_font_files,
        verdict=result.verdict.value,
    )
