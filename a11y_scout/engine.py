# File: a11y_scout/engine.py
"""a11y_scout.engine: оркестрация запуска обхода, агрегации и записи отчётов."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from a11y_scout.aggregator import ReportAggregator, SiteSummary
from a11y_scout.config import CrawlConfig
from a11y_scout.crawler.analyzer import Analyzer
from a11y_scout.crawler.crawler import AccessibilityCrawler
from a11y_scout.crawler.models import PageResult
from a11y_scout.crawler.renderer import Renderer
from a11y_scout.logger import logger
from a11y_scout.report.html_report import render_html
from a11y_scout.report.json_report import render_json

__all__ = ["ScanResult", "log_progress", "start_scan", "write_reports"]

SUMMARY_JSON = "summary.json"


@dataclass(slots=True)
class ScanResult:
    """Итог обхода: сводка по сайту и результаты страниц в порядке обхода."""

    summary: SiteSummary
    pages: List[PageResult] = field(default_factory=list)
    failed_urls: List[str] = field(default_factory=list)


def log_progress(result: PageResult) -> None:
    """Пишет в лог итог по одной странице сразу после её анализа."""
    issues = result.categorized()
    logger.info(
        "✓ Analyzed: %s (%d errors, %d warnings, %d notices)",
        result.url, len(issues.errors), len(issues.warnings), len(issues.notices),
    )


async def start_scan(
    cfg: CrawlConfig,
    *,
    analyzer: Optional[Analyzer] = None,
    renderer: Optional[Renderer] = None,
    on_result: Optional[Callable[[PageResult], None]] = log_progress,
) -> ScanResult:
    """
    Запускает краулер в контексте и возвращает ScanResult.

    SetupError (браузер или pa11y недоступны) пробрасывается вызывающему;
    ресурсы браузера освобождаются в любом случае.
    """
    logger.info("Starting crawl of %s", cfg.start_url)
    logger.info(
        "Standard: %s | max depth: %d | concurrency: %d | output: %s",
        cfg.standard, cfg.max_depth, cfg.concurrency, cfg.output_dir,
    )
    crawler = AccessibilityCrawler(
        cfg,
        analyzer=analyzer,
        renderer=renderer,
        aggregator=ReportAggregator(),
        on_result=on_result,
    )
    async with crawler:
        summary = await crawler.crawl()
    return ScanResult(
        summary=summary,
        pages=list(crawler.results),
        failed_urls=[f.url for f in crawler.failures],
    )


def write_reports(
    result: ScanResult,
    cfg: CrawlConfig,
    *,
    template_dir: Union[str, Path, None] = None,
    json_path: Union[str, Path, None] = None,
) -> Path:
    """Записывает HTML-отчёты и summary.json; возвращает путь к главному index.html."""
    index_path = render_html(result.summary, result.pages, cfg, cfg.output_dir, template_dir)
    render_json(result.summary, cfg, json_path or Path(cfg.output_dir) / SUMMARY_JSON)
    logger.info("Reports written to %s", index_path.parent.resolve())
    return index_path
