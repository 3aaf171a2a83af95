# File: font_scout/report/__init__.py
"""font_scout.report: Текстовый и JSON-отчёты, используемые CLI и тестами."""

from __future__ import annotations

from font_scout.report.json_report import render_json
from font_scout.report.text_report import render_text

__all__ = ["render_json", "render_text"]
