# a11y_scout/crawler/analyzer.py
"""
Page analyzer adapter: runs the pa11y command-line tool against one URL.

pa11y is a Node.js program; it is driven as a subprocess with
``--reporter json`` and its stdout is parsed into :class:`PageResult`.
Exit status 0 means no issues, 2 means issues were found, anything else is
a technical failure.
"""
from __future__ import annotations

import asyncio
import contextlib
import json
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence

from a11y_scout.crawler.categorizer import issues_from_results
from a11y_scout.crawler.models import PageResult
from a11y_scout.exceptions import AnalysisError, SetupError
from a11y_scout.logger import logger

__all__ = ("AnalysisOptions", "Analyzer", "Pa11yAnalyzer")

# Time on top of the navigation timeout for pa11y's own startup and reporting.
_GRACE_SECONDS = 15.0
_OK_EXIT_CODES = (0, 2)


@dataclass(frozen=True, slots=True)
class AnalysisOptions:
    standard: str = "WCAG2AA"
    timeout_ms: int = 30_000
    wait_ms: int = 1_000
    include_warnings: bool = False
    include_notices: bool = False

    @classmethod
    def from_config(cls, config: Any) -> AnalysisOptions:
        return cls(
            standard=config.standard,
            timeout_ms=config.timeout_ms,
            wait_ms=config.wait_ms,
            include_warnings=config.include_warnings,
            include_notices=config.include_notices,
        )


class Analyzer(Protocol):
    """Accessibility engine as seen by the crawler."""

    async def ensure_available(self) -> None: ...

    async def analyze(self, url: str, options: AnalysisOptions) -> PageResult: ...


class Pa11yAnalyzer:
    """Runs ``pa11y --reporter json`` per page."""

    def __init__(
        self,
        command: str = "pa11y",
        config_file: Optional[str] = None,
        grace_seconds: float = _GRACE_SECONDS,
    ) -> None:
        self.command = command
        self.config_file = config_file
        self.grace_seconds = grace_seconds

    def build_args(self, url: str, options: AnalysisOptions) -> List[str]:
        args = [
            "--reporter", "json",
            "--standard", options.standard,
            "--timeout", str(options.timeout_ms),
            "--wait", str(options.wait_ms),
        ]
        if options.include_warnings:
            args.append("--include-warnings")
        if options.include_notices:
            args.append("--include-notices")
        if self.config_file:
            args += ["--config", self.config_file]
        args.append(url)
        return args

    async def _run(self, args: Sequence[str], timeout: float) -> tuple[int, bytes, bytes]:
        proc = await asyncio.create_subprocess_exec(
            self.command,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        finally:
            # the child never outlives this call, whether it timed out or the crawl was cancelled
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()
        return proc.returncode, stdout, stderr

    async def ensure_available(self) -> None:
        try:
            rc, stdout, stderr = await self._run(["--version"], timeout=self.grace_seconds)
        except (OSError, asyncio.TimeoutError) as exc:
            raise SetupError("pa11y", exc) from exc
        if rc != 0:
            raise SetupError("pa11y", stderr.decode("utf-8", "replace").strip() or f"exit status {rc}")
        logger.debug("Using pa11y %s", stdout.decode("utf-8", "replace").strip())

    async def analyze(self, url: str, options: AnalysisOptions) -> PageResult:
        timeout = options.timeout_ms / 1000 + options.wait_ms / 1000 + self.grace_seconds
        try:
            rc, stdout, stderr = await self._run(self.build_args(url, options), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise AnalysisError(url, f"timed out after {timeout:.0f}s") from exc
        except OSError as exc:
            raise AnalysisError(url, exc) from exc

        if rc not in _OK_EXIT_CODES:
            message = stderr.decode("utf-8", "replace").strip() or f"pa11y exit status {rc}"
            raise AnalysisError(url, message)

        try:
            payload = json.loads(stdout.decode("utf-8", "replace") or "[]")
        except json.JSONDecodeError as exc:
            raise AnalysisError(url, f"invalid pa11y output: {exc}") from exc

        # The CLI json reporter prints the bare issue list.
        results = {"issues": payload} if isinstance(payload, list) else payload
        return PageResult(url=url, issues=tuple(issues_from_results(results)))
