# === FILE: font_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации проверки FontScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome Safari"
)
DEFAULT_ACCEPT_LANGUAGE = "de-DE,de;q=0.9,en;q=0.8"
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


def ensure_scheme(url: str) -> str:
    """Добавляет ``https://`` к адресу без схемы."""
    url = url.strip()
    if not _SCHEME_RE.match(url):
        return f"https://{url.lstrip('/')}"
    return url


class ScannerConfig(BaseModel):
    """Конфигурация для одного запуска проверки."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., min_length=1, description="Проверяемая страница.")
    max_depth: int = Field(4, ge=1, description="Максимальная глубина цепочек @import.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    accept_language: str = Field(
        DEFAULT_ACCEPT_LANGUAGE, min_length=1, description="Заголовок Accept-Language."
    )
    timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут на один запрос (секунд); None — значение aiohttp."
    )
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429.")
    concurrency: int = Field(1, ge=1, description="Параллельные загрузки в пределах уровня.")

    @field_validator("url", mode="before")
    def _add_scheme(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip():
            return ensure_scheme(v)
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


# расширение файла -> (название формата, парсер, его исключение)
_PARSERS: dict[str, tuple[str, Callable[[str], Any], type[Exception]]] = {
    ".yaml": ("YAML", yaml.safe_load, yaml.YAMLError),
    ".yml": ("YAML", yaml.safe_load, yaml.YAMLError),
    ".json": ("JSON", json.loads, json.JSONDecodeError),
}


def _read_file(path_obj: Path) -> dict[str, Any]:
    """Разбирает файл настроек; формат определяется по расширению."""
    suffix = path_obj.suffix.lower()
    if suffix not in _PARSERS:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")
    fmt, parse, parse_error = _PARSERS[suffix]
    try:
        settings = parse(path_obj.read_text(encoding="utf-8"))
    except parse_error as exc:
        raise ValueError(f"{path_obj.name}: не удалось разобрать {fmt}: {exc}") from exc
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise TypeError(f"{path_obj.name}: ожидался словарь настроек, а не {type(settings).__name__}")
    return settings


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ScannerConfig:
    """
    Читает YAML или JSON, накладывает overrides (значения CLI) и возвращает
    проверенный объект ScannerConfig.

    Без явного пути используется configs/default.yaml, если он есть,
    иначе только значения по умолчанию. Явно указанный, но отсутствующий
    файл — FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return ScannerConfig(**data)
