# File: tests/conftest.py
import asyncio
from typing import Dict, Iterable, List, Optional

import pytest

from a11y_scout.config import CrawlConfig
from a11y_scout.crawler.analyzer import AnalysisOptions
from a11y_scout.crawler.categorizer import issues_from_results
from a11y_scout.crawler.models import PageResult, RenderedPage
from a11y_scout.exceptions import AnalysisError, RenderError, SetupError

ROOT = "https://example.com"


def raw_issue(kind: str, code: str = "WCAG2AA.Principle1.Guideline1_1.1_1_1.H37") -> dict:
    """A pa11y issue as printed by ``--reporter json``."""
    return {
        "type": kind,
        "code": code,
        "message": f"{kind} message",
        "selector": "html > body > img",
        "context": '<img src="logo.png">',
        "runner": "htmlcs",
    }


class FakeAnalyzer:
    """In-memory analyzer: issues per URL, failing URLs, optional delay."""

    def __init__(
        self,
        issues: Optional[Dict[str, List[dict]]] = None,
        failing: Iterable[str] = (),
        delay: float = 0.0,
        unavailable: bool = False,
    ):
        self.issues = issues or {}
        self.failing = set(failing)
        self.delay = delay
        self.unavailable = unavailable
        self.calls: List[str] = []
        self.options: List[AnalysisOptions] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def ensure_available(self) -> None:
        if self.unavailable:
            raise SetupError("pa11y", "command not found")

    async def analyze(self, url: str, options: AnalysisOptions) -> PageResult:
        self.calls.append(url)
        self.options.append(options)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if url in self.failing:
                raise AnalysisError(url, "timed out")
            raw = self.issues.get(url, [])
            return PageResult(url=url, issues=tuple(issues_from_results({"issues": raw})))
        finally:
            self.in_flight -= 1


class FakeRenderer:
    """Serves a site graph: URL -> hrefs found on that page."""

    def __init__(
        self,
        site: Optional[Dict[str, List[str]]] = None,
        broken: Iterable[str] = (),
        fail_start: bool = False,
    ):
        self.site = site or {}
        self.broken = set(broken)
        self.fail_start = fail_start
        self.started = False
        self.close_calls = 0
        self.rendered: List[str] = []

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    async def start(self) -> None:
        if self.fail_start:
            raise SetupError("browser", "chromium is not installed")
        self.started = True

    async def render(self, url: str, timeout_ms: int) -> RenderedPage:
        self.rendered.append(url)
        if url in self.broken:
            raise RenderError(url, "net::ERR_CONNECTION_RESET")
        html = "".join(f'<a href="{href}">link</a>' for href in self.site.get(url, []))
        return RenderedPage(url=url, html=f"<html><body>{html}</body></html>")

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture()
def make_config():
    """Factory for a CrawlConfig rooted at https://example.com."""

    def _make(**overrides) -> CrawlConfig:
        data = {"start_url": ROOT, "max_depth": 2, "concurrency": 3}
        data.update(overrides)
        return CrawlConfig(**data)

    return _make


@pytest.fixture()
def basic_config(make_config) -> CrawlConfig:
    return make_config()
