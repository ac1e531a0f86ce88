# === FILE: a11y_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Deque, List, Optional, Sequence, Set

from a11y_scout.aggregator import ReportAggregator, SiteSummary
from a11y_scout.crawler.analyzer import AnalysisOptions, Analyzer, Pa11yAnalyzer
from a11y_scout.crawler.link_extractor import extract_links
from a11y_scout.crawler.models import CrawlTarget, PageResult
from a11y_scout.crawler.renderer import PlaywrightRenderer, Renderer
from a11y_scout.crawler.urls import is_excluded, normalize
from a11y_scout.exceptions import AnalysisError, RenderError, SetupError
from a11y_scout.logger import LOGGER_NAME

__all__ = ("CrawlState", "AccessibilityCrawler")


class CrawlState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class _Outcome:
    """What processing one target produced; merged into crawl state after the batch."""

    target: CrawlTarget
    result: Optional[PageResult] = None
    error: Optional[AnalysisError] = None
    links: List[str] = field(default_factory=list)


class AccessibilityCrawler:
    """
    Breadth-first, same-origin crawler that runs an accessibility analysis per page.

    The frontier is drained in batches of at most ``config.concurrency``
    targets; a batch is processed concurrently and fully awaited before the
    next one is dequeued, so every page at depth *d* is handled before any
    page at depth *d + 1*.

    Usage::

        async with AccessibilityCrawler(config) as crawler:
            summary = await crawler.crawl()
    """

    def __init__(
        self,
        config,
        *,
        analyzer: Optional[Analyzer] = None,
        renderer: Optional[Renderer] = None,
        aggregator: Optional[ReportAggregator] = None,
        on_result: Optional[Callable[[PageResult], None]] = None,
    ) -> None:
        self.config = config
        self.analyzer: Analyzer = analyzer or Pa11yAnalyzer(config.pa11y_command, config.pa11y_config)
        self.renderer: Renderer = renderer or PlaywrightRenderer.from_config(config)
        self.aggregator = aggregator or ReportAggregator()
        self.options = AnalysisOptions.from_config(config)
        self.on_result = on_result
        self.logger = logging.getLogger(LOGGER_NAME)

        self.state = CrawlState.IDLE
        self.visited: Set[str] = set()
        self.frontier: Deque[CrawlTarget] = deque()
        self.dequeued: List[CrawlTarget] = []
        self.results: List[PageResult] = []
        self.failures: List[AnalysisError] = []
        self._frontier_lock = asyncio.Lock()
        self._ready = False

    async def __aenter__(self) -> AccessibilityCrawler:
        try:
            await self.analyzer.ensure_available()
            await self.renderer.start()
        except SetupError as exc:
            self.state = CrawlState.FAILED
            self.logger.error("Crawl setup failed: %s", exc)
            await self.renderer.close()
            raise
        self._ready = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._ready = False
        await self.renderer.close()

    @property
    def pages_visited(self) -> int:
        return len(self.dequeued)

    async def crawl(self) -> SiteSummary:
        if not self._ready:
            raise RuntimeError("AccessibilityCrawler must be entered with 'async with' before crawl()")
        if self.state is not CrawlState.IDLE:
            raise RuntimeError(f"crawl() already ran (state={self.state.value})")

        root = normalize(self.config.start_url, self.config.start_url)
        if root is None:
            self.state = CrawlState.FAILED
            raise SetupError("start URL", f"cannot normalize {self.config.start_url!r}")

        self.logger.info("Crawl started: %s (max depth %d)", root, self.config.max_depth)
        started = time.monotonic()
        async with self._frontier_lock:
            self._enqueue(root, 0)

        while self.frontier:
            self.state = CrawlState.RUNNING
            batch = [self.frontier.popleft() for _ in range(min(self.config.concurrency, len(self.frontier)))]
            self.dequeued.extend(batch)
            if not self.frontier:
                self.state = CrawlState.DRAINING
            self.logger.info(
                "Crawling %d pages... (%d total found, %d queued)",
                len(batch), len(self.visited), len(self.frontier),
            )
            outcomes = await asyncio.gather(*(self._process(target) for target in batch))
            await self._merge(outcomes)

        self.state = CrawlState.DONE
        duration = time.monotonic() - started
        self.logger.info(
            "Crawl finished: %d pages analyzed, %d failed in %.2fs",
            len(self.results), len(self.failures), duration,
        )
        return self.aggregator.finalize()

    async def _process(self, target: CrawlTarget) -> _Outcome:
        outcome = _Outcome(target)
        max_depth = self.config.max_depth
        if target.depth >= max_depth:
            self.logger.debug("Skipping (max depth) %s", target.url)
            return outcome

        try:
            result = await self.analyzer.analyze(target.url, self.options)
        except AnalysisError as exc:
            self.logger.warning("Error analyzing %s: %s", target.url, exc.cause)
            outcome.error = exc
            return outcome
        outcome.result = replace(result, depth=target.depth)

        # Links found at max_depth - 1 would only yield targets that get skipped.
        if target.depth < max_depth - 1:
            outcome.links = await self._discover_links(target)
        return outcome

    async def _discover_links(self, target: CrawlTarget) -> List[str]:
        try:
            page = await self.renderer.render(target.url, self.config.timeout_ms)
        except RenderError as exc:
            self.logger.warning("Could not extract links from %s: %s", target.url, exc.cause)
            return []

        links: List[str] = []
        base_url = page.url or target.url
        for href in extract_links(page, base_url):
            link = normalize(href, base_url)
            if link is None or is_excluded(link, self.config):
                continue
            links.append(link)
        return links

    async def _merge(self, outcomes: Sequence[_Outcome]) -> None:
        """Apply a finished batch to the crawl state, in batch order."""
        async with self._frontier_lock:
            for outcome in outcomes:
                if outcome.result is not None:
                    self._record(outcome.result)
                elif outcome.error is not None:
                    self.failures.append(outcome.error)
                    self.aggregator.record_failure(outcome.target.url, str(outcome.error.cause))
                for link in outcome.links:
                    self._enqueue(link, outcome.target.depth + 1)

    def _record(self, result: PageResult) -> None:
        self.aggregator.record(result)
        self.results.append(result)
        self.logger.debug("Recorded %s (depth %d)", result.url, result.depth)
        if self.on_result is not None:
            self.on_result(result)

    def _enqueue(self, url: str, depth: int) -> bool:
        """Check-and-insert into the visited set; caller holds ``_frontier_lock``."""
        if url in self.visited:
            return False
        self.visited.add(url)
        self.frontier.append(CrawlTarget(url, depth))
        return True

