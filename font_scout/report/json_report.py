# font_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта FontScout.

Сериализация объекта RunResult в файл.
"""
import json
from pathlib import Path

from font_scout.crawler.models import RunResult


def render_json(result: RunResult, output_path: Path | str) -> Path:
    """
    Сохраняет результат проверки в формате JSON по указанному пути.

    :param result: объект RunResult с найденными ссылками и вердиктом
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from font_scout.report.json_report import render_json
    report_path = render_json(result, 'reports/fonts.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'destination': result.destination,
        'stylesheets': result.sorted_stylesheets,
        'font_files': result.sorted_font_files,
        'verdict': result.verdict.value,
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
