"""a11y_scout.report.html_report: Генерация HTML-отчётов с помощью Jinja2."""

from __future__ import annotations

import hashlib
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Union
from urllib.parse import urlsplit

from jinja2 import Environment, FileSystemLoader, select_autoescape

from a11y_scout.aggregator import PageSummary, SiteSummary
from a11y_scout.crawler.models import PageResult

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def page_slug(url: str) -> str:
    """Имя каталога детального отчёта: путь страницы, '/' заменены на '_'.

    Корень сайта даёт ``home``; при наличии query добавляется короткий хэш,
    чтобы ``/list?page=1`` и ``/list?page=2`` не перезаписывали друг друга.
    """
    parts = urlsplit(url)
    path = parts.path if parts.path not in ("", "/") else "/home"
    slug = path.replace("/", "_").lstrip("_") or "home"
    if parts.query:
        slug += "_" + hashlib.sha1(parts.query.encode("utf-8")).hexdigest()[:8]
    return slug


def status_color(page: PageSummary) -> str:
    if page.error_count > 0:
        return "#e74c3c"
    if page.warning_count > 0:
        return "#f39c12"
    return "#27ae60"


def _environment(template_dir: Union[Path, str]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    env.filters["page_slug"] = page_slug
    env.filters["status_color"] = status_color
    return env


def _page_sections(result: PageResult, config: Any) -> list[dict[str, Any]]:
    issues = result.categorized()
    return [
        {"key": "errors", "title": "Errors", "issues": issues.errors,
         "collapsible": False, "expanded": True},
        {"key": "warnings", "title": "Warnings", "issues": issues.warnings,
         "collapsible": True, "expanded": config.include_warnings},
        {"key": "notices", "title": "Notices", "issues": issues.notices,
         "collapsible": True, "expanded": config.include_notices},
    ]


def render_html(
    summary: SiteSummary,
    pages: Iterable[PageResult],
    config: Any,
    output_dir: Union[Path, str, None] = None,
    template_dir: Union[Path, str, None] = None,
    generated_at: Optional[datetime] = None,
) -> Path:
    """Рендерит сводный, общий и постраничные HTML-отчёты.

    Args:
        summary: итоговая сводка SiteSummary.
        pages: результаты анализа страниц (для детальных отчётов).
        config: CrawlConfig с метаданными отчёта.
        output_dir: корневой каталог отчётов (по умолчанию config.output_dir).
        template_dir: директория с Jinja2-шаблонами (по умолчанию встроенные).

    Returns:
        Path до ``index.html``.

    Структура::

        <output_dir>/index.html
        <output_dir>/combined/index.html
        <output_dir>/pages/<slug>/report.html
    """
    out = Path(output_dir if output_dir is not None else config.output_dir)
    env = _environment(template_dir or DEFAULT_TEMPLATE_DIR)
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    base_ctx: dict[str, Any] = {"config": config, "summary": summary, "generated_at": stamp}

    page_tpl = env.get_template("page.html.j2")
    for result in pages:
        page_path = out / "pages" / page_slug(result.url) / "report.html"
        page_path.parent.mkdir(parents=True, exist_ok=True)
        page_path.write_text(
            page_tpl.render(
                **base_ctx,
                url=result.url,
                issues=result.categorized(),
                sections=_page_sections(result, config),
            ),
            encoding="utf-8",
        )

    combined_path = out / "combined" / "index.html"
    combined_path.parent.mkdir(parents=True, exist_ok=True)
    combined_path.write_text(env.get_template("combined.html.j2").render(**base_ctx), encoding="utf-8")

    index_path = out / "index.html"
    index_path.write_text(env.get_template("index.html.j2").render(**base_ctx), encoding="utf-8")
    return index_path


__all__ = ["render_html", "page_slug", "status_color", "DEFAULT_TEMPLATE_DIR"]
