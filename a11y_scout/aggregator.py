# File: a11y_scout/aggregator.py
"""a11y_scout.aggregator: Агрегатор результатов анализа страниц в сводку по сайту."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from a11y_scout.crawler.models import PageResult


@dataclass(slots=True)
class PageSummary:
    """Счётчики проблем одной страницы."""

    url: str
    issue_count: int = 0
    error_count: int = 0
    warning_count: int = 0
    notice_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "issues": self.issue_count,
            "errors": self.error_count,
            "warnings": self.warning_count,
            "notices": self.notice_count,
        }


@dataclass(slots=True)
class FailedPage:
    """Страница, анализ которой не удался; в итоги не входит."""

    url: str
    reason: str


@dataclass(slots=True)
class SiteSummary:
    """Итоговая сводка по сайту: общие счётчики и детали по страницам в порядке обхода."""

    total_pages: int = 0
    total_issues: int = 0
    total_errors: int = 0
    total_warnings: int = 0
    total_notices: int = 0
    page_details: List[PageSummary] = field(default_factory=list)
    failed_pages: List[FailedPage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Словарь с ключами в camelCase для summary.json."""
        return {
            "totalPages": self.total_pages,
            "totalIssues": self.total_issues,
            "totalErrors": self.total_errors,
            "totalWarnings": self.total_warnings,
            "totalNotices": self.total_notices,
            "pageDetails": [p.to_dict() for p in self.page_details],
            "failedPages": [asdict(f) for f in self.failed_pages],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление сводки."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


class ReportAggregator:
    """Накапливает PageResult по мере обхода и строит SiteSummary."""

    def __init__(self) -> None:
        self._summary = SiteSummary()
        self._finalized = False

    def record(self, result: PageResult) -> PageSummary:
        """Учитывает результат одной страницы; порядок вызовов = порядок в отчёте."""
        if self._finalized:
            raise RuntimeError("aggregator is already finalized")
        buckets = result.categorized()
        entry = PageSummary(
            url=result.url,
            issue_count=buckets.total,
            error_count=len(buckets.errors),
            warning_count=len(buckets.warnings),
            notice_count=len(buckets.notices),
        )
        s = self._summary
        s.total_pages += 1
        s.total_issues += entry.issue_count
        s.total_errors += entry.error_count
        s.total_warnings += entry.warning_count
        s.total_notices += entry.notice_count
        s.page_details.append(entry)
        return entry

    def record_failure(self, url: str, reason: str) -> None:
        """Запоминает страницу, которую не удалось проанализировать."""
        if self._finalized:
            raise RuntimeError("aggregator is already finalized")
        self._summary.failed_pages.append(FailedPage(url=url, reason=reason))

    @property
    def pages_recorded(self) -> int:
        return self._summary.total_pages

    def finalize(self) -> SiteSummary:
        """Возвращает итоговую сводку; вызывается один раз после завершения обхода."""
        if self._finalized:
            raise RuntimeError("finalize() may only be called once")
        self._finalized = True
        return self._summary


__all__ = ["PageSummary", "FailedPage", "SiteSummary", "ReportAggregator"]
