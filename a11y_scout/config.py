# === FILE: a11y_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера A11yScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from a11y_scout.crawler.urls import Origin, origin_of

Standard = Literal["WCAG2A", "WCAG2AA", "WCAG2AAA"]


class CrawlConfig(BaseModel):
    """Конфигурация одного запуска обхода сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: str = Field(..., description="Абсолютный URL, с которого начинается обход.")
    max_depth: int = Field(3, ge=1, description="Максимальная глубина обхода (считается в страницах).")
    concurrency: int = Field(3, ge=1, description="Число страниц, анализируемых параллельно в одном пакете.")
    timeout_ms: int = Field(30_000, gt=0, description="Таймаут навигации и анализа (мс).")
    wait_ms: int = Field(1_000, ge=0, description="Пауза после загрузки страницы перед анализом (мс).")
    standard: Standard = Field("WCAG2AA", description="Стандарт доступности для pa11y.")
    include_warnings: bool = Field(False, description="Включать предупреждения в отчёт.")
    include_notices: bool = Field(False, description="Включать уведомления в отчёт.")
    exclude: List[str] = Field(default_factory=list, description="Подстроки URL, исключаемые из обхода.")
    summary: Optional[str] = Field(None, description="Произвольный текст резюме для отчёта.")
    project_key: str = Field("ACCESSIBILITY", min_length=1, description="Метка проекта в отчётах.")
    output_dir: str = Field("accessibility-reports", min_length=1, description="Каталог для отчётов.")
    pa11y_command: str = Field("pa11y", min_length=1, description="Исполняемый файл pa11y.")
    pa11y_config: Optional[str] = Field(None, description="JSON-конфиг pa11y (например, аргументы Chrome).")
    viewport_width: int = Field(1280, gt=0)
    viewport_height: int = Field(800, gt=0)

    @field_validator("start_url")
    def _check_absolute_url(cls, v: str) -> str:
        v = v.strip()
        try:
            parts = urlsplit(v)
            parts.port
        except ValueError as exc:
            raise ValueError(f"Invalid URL: {v}") from exc
        if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
            raise ValueError(f"Invalid URL: {v}")
        return v

    @field_validator("exclude", mode="before")
    def _split_patterns(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            return [str(p).strip() for p in v if str(p).strip()]
        return v

    @property
    def origin_key(self) -> Origin:
        return origin_of(self.start_url)

    @property
    def origin(self) -> str:
        """``scheme://host[:port]`` of the start URL, default port omitted."""
        parts = urlsplit(self.start_url)
        scheme = parts.scheme.lower()
        host = (parts.hostname or "").lower()
        if ":" in host:
            host = f"[{host}]"
        port = parts.port
        if port is None or port == {"http": 80, "https": 443}.get(scheme):
            return f"{scheme}://{host}"
        return f"{scheme}://{host}:{port}"


DEFAULT_CONFIG_FILE = Path("a11y_scout.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML или JSON файл и возвращает словарь без валидации."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Собирает CrawlConfig из файла (YAML/JSON) и переопределений.

    Переопределения со значением None игнорируются, поэтому опции CLI,
    которые пользователь не указал, не затирают значения из файла.
    При path=None используется a11y_scout.yaml из текущего каталога, если он есть.
    """
    if path is None:
        data = _read_yaml(DEFAULT_CONFIG_FILE) if DEFAULT_CONFIG_FILE.is_file() else {}
    else:
        data = read_config_file(path)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlConfig(**data)


__all__ = ["CrawlConfig", "Standard", "load_config", "read_config_file", "DEFAULT_CONFIG_FILE"]
