# a11y_scout/crawler/models.py
"""
Data models shared by the crawler, the adapters and the aggregator.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class Severity(str, Enum):
    """Severity bucket of an accessibility issue."""

    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"


@dataclass(frozen=True, slots=True)
class CrawlTarget:
    """A URL waiting in the frontier together with its BFS depth."""

    url: str
    depth: int

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")


@dataclass(frozen=True, slots=True)
class Issue:
    """One accessibility issue reported by the analyzer."""

    severity: Severity
    message: str
    rule_code: str
    selector: str
    context: Optional[str] = None
    runner: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CategorizedIssues:
    """Issues split into the three severity buckets, input order kept in each."""

    errors: Tuple[Issue, ...] = ()
    warnings: Tuple[Issue, ...] = ()
    notices: Tuple[Issue, ...] = ()

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> CategorizedIssues:
        buckets: dict[Severity, list[Issue]] = {s: [] for s in Severity}
        for issue in issues:
            buckets[issue.severity].append(issue)
        return cls(
            errors=tuple(buckets[Severity.ERROR]),
            warnings=tuple(buckets[Severity.WARNING]),
            notices=tuple(buckets[Severity.NOTICE]),
        )

    @property
    def total(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.notices)


@dataclass(frozen=True, slots=True)
class PageResult:
    """Analysis result for one page; ``depth`` is stamped by the crawler."""

    url: str
    issues: Tuple[Issue, ...] = ()
    depth: int = 0

    def categorized(self) -> CategorizedIssues:
        return CategorizedIssues.from_issues(self.issues)

    @property
    def errors(self) -> Tuple[Issue, ...]:
        return self.categorized().errors

    @property
    def warnings(self) -> Tuple[Issue, ...]:
        return self.categorized().warnings

    @property
    def notices(self) -> Tuple[Issue, ...]:
        return self.categorized().notices


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """DOM snapshot of a rendered page."""

    url: str
    html: str


__all__ = [
    "Severity",
    "CrawlTarget",
    "Issue",
    "CategorizedIssues",
    "PageResult",
    "RenderedPage",
]
