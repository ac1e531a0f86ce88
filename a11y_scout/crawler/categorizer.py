# a11y_scout/crawler/categorizer.py
"""
Classification of raw pa11y issues into severity buckets.

pa11y reports the severity twice: a symbolic ``type`` (``"error"``,
``"warning"``, ``"notice"``) and a legacy numeric ``typeCode`` (1, 2, 3).
:func:`severity_of` is the only place that maps either form to a
:class:`Severity`, so every issue lands in exactly one bucket or in none.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from a11y_scout.crawler.models import CategorizedIssues, Issue, Severity

__all__ = ("severity_of", "to_issue", "issues_from_results", "categorize")

_BY_TYPE: dict[str, Severity] = {s.value: s for s in Severity}
_BY_TYPE_CODE: dict[int, Severity] = {1: Severity.ERROR, 2: Severity.WARNING, 3: Severity.NOTICE}


def severity_of(raw: Any) -> Optional[Severity]:
    """Return the severity of a raw issue mapping, or ``None`` for unknown shapes."""
    if not isinstance(raw, Mapping):
        return None
    kind = raw.get("type")
    if isinstance(kind, str) and kind.lower() in _BY_TYPE:
        return _BY_TYPE[kind.lower()]
    code = raw.get("typeCode")
    # bool is an int subclass; True must not read as typeCode 1
    if isinstance(code, int) and not isinstance(code, bool):
        return _BY_TYPE_CODE.get(code)
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def to_issue(raw: Any) -> Optional[Issue]:
    severity = severity_of(raw)
    if severity is None:
        return None
    context = raw.get("context")
    runner = raw.get("runner")
    return Issue(
        severity=severity,
        message=_text(raw.get("message")),
        rule_code=_text(raw.get("code")),
        selector=_text(raw.get("selector")),
        context=None if context is None else str(context),
        runner=None if runner is None else str(runner),
    )


def issues_from_results(results: Any) -> List[Issue]:
    """Convert analyzer output (``{"issues": [...]}``) to issues, keeping input order."""
    if not isinstance(results, Mapping):
        return []
    raw_issues = results.get("issues")
    if not isinstance(raw_issues, list):
        return []
    return [issue for issue in map(to_issue, raw_issues) if issue is not None]


def categorize(results: Any) -> CategorizedIssues:
    """Split analyzer output into errors, warnings and notices.

    Missing or malformed output yields three empty buckets.
    """
    return CategorizedIssues.from_issues(issues_from_results(results))
