"""Exception taxonomy for A11yScout.

Only :class:`SetupError` is fatal for a crawl; the per-page errors are
logged by the orchestrator and never stop the traversal.
"""
from __future__ import annotations


class A11yScoutError(Exception):
    """Base class for all project errors."""


class SetupError(A11yScoutError):
    """Raised when a collaborator (browser, accessibility engine) cannot be started."""

    def __init__(self, component: str, cause: BaseException | str):
        self.component = component
        self.cause = cause
        super().__init__(f"{component} unavailable: {cause}")


class AnalysisError(A11yScoutError):
    """Raised when the accessibility analysis of one page fails or times out."""

    def __init__(self, url: str, cause: BaseException | str):
        self.url = url
        self.cause = cause
        super().__init__(f"Analysis failed for {url}: {cause}")


class RenderError(A11yScoutError):
    """Raised when a page cannot be rendered for link extraction."""

    def __init__(self, url: str, cause: BaseException | str):
        self.url = url
        self.cause = cause
        super().__init__(f"Render failed for {url}: {cause}")


class MalformedUrlError(A11yScoutError):
    """A discovered link that cannot be turned into an absolute URL."""

    def __init__(self, url: object, cause: BaseException | str):
        self.url = url
        self.cause = cause
        super().__init__(f"Malformed URL {url!r}: {cause}")


__all__ = [
    "A11yScoutError",
    "SetupError",
    "AnalysisError",
    "RenderError",
    "MalformedUrlError",
]
