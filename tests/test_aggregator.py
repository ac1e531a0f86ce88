# File: tests/test_aggregator.py
"""Тесты агрегатора: итоговые счётчики равны сумме по страницам."""
import json

import pytest

from a11y_scout.aggregator import ReportAggregator
from a11y_scout.crawler.categorizer import issues_from_results
from a11y_scout.crawler.models import PageResult

from .conftest import raw_issue


def page(url, *kinds):
    issues = issues_from_results({"issues": [raw_issue(k) for k in kinds]})
    return PageResult(url=url, issues=tuple(issues))


def test_totals_are_sums_of_pages():
    agg = ReportAggregator()
    agg.record(page("https://example.com", "error", "error", "warning"))
    agg.record(page("https://example.com/a", "notice"))
    agg.record(page("https://example.com/b"))
    summary = agg.finalize()

    assert summary.total_pages == 3
    assert summary.total_errors == sum(p.error_count for p in summary.page_details) == 2
    assert summary.total_warnings == sum(p.warning_count for p in summary.page_details) == 1
    assert summary.total_notices == sum(p.notice_count for p in summary.page_details) == 1
    assert summary.total_issues == 4
    assert [p.url for p in summary.page_details] == [
        "https://example.com", "https://example.com/a", "https://example.com/b",
    ]


def test_record_returns_page_counts():
    entry = ReportAggregator().record(page("https://example.com", "error", "notice"))
    assert (entry.issue_count, entry.error_count, entry.warning_count, entry.notice_count) == (2, 1, 0, 1)


def test_empty_crawl_summary():
    summary = ReportAggregator().finalize()
    assert summary.total_pages == 0
    assert summary.total_issues == 0
    assert summary.page_details == []


def test_failures_do_not_count_as_pages():
    agg = ReportAggregator()
    agg.record_failure("https://example.com/slow", "timed out")
    summary = agg.finalize()

    assert summary.total_pages == 0
    assert summary.failed_pages[0].reason == "timed out"


def test_finalize_only_once():
    agg = ReportAggregator()
    agg.finalize()
    with pytest.raises(RuntimeError):
        agg.finalize()
    with pytest.raises(RuntimeError):
        agg.record(page("https://example.com"))


def test_summary_json_keys():
    agg = ReportAggregator()
    agg.record(page("https://example.com", "warning"))
    data = json.loads(agg.finalize().json(pretty=True))

    assert set(data) == {
        "totalPages", "totalIssues", "totalErrors", "totalWarnings",
        "totalNotices", "pageDetails", "failedPages",
    }
    assert data["pageDetails"] == [
        {"url": "https://example.com", "issues": 1, "errors": 0, "warnings": 1, "notices": 0}
    ]
