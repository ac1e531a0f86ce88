# a11y_scout/crawler/urls.py
"""
URL canonicalisation and the same-origin exclusion policy for the crawler.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from a11y_scout.exceptions import MalformedUrlError
from a11y_scout.logger import logger

__all__ = (
    "EXCLUDED_EXTENSIONS",
    "Origin",
    "normalize",
    "origin_of",
    "is_excluded",
    "exclusion_reason",
)

Origin = Tuple[str, str, Optional[int]]

_DEFAULT_PORTS = {"http": 80, "https": 443}

# Non-document resources; the frontier only ever holds HTML pages.
EXCLUDED_EXTENSIONS: frozenset[str] = frozenset((
    ".css", ".js", ".mjs", ".map",
    ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".webp", ".avif", ".bmp",
    ".pdf", ".zip", ".rar", ".7z", ".gz", ".tar",
    ".mp4", ".webm", ".mov", ".avi", ".mp3", ".wav", ".ogg",
    ".woff", ".woff2", ".ttf", ".eot",
    ".json", ".xml", ".csv", ".txt",
))


def _resolve(url: Any, base_url: str) -> str:
    if not isinstance(url, str):
        raise MalformedUrlError(url, "not a string")
    try:
        joined = urljoin(base_url, url.strip())
        parts = urlsplit(joined)
        # .port raises ValueError for out-of-range or non-numeric ports
        parts.port
    except ValueError as exc:
        raise MalformedUrlError(url, exc) from exc
    if not parts.scheme or not parts.hostname:
        raise MalformedUrlError(url, "not an absolute URL")
    return _canonical(parts)


def _canonical(parts: SplitResult) -> str:
    """Lower-case scheme and host, drop the default port, keep userinfo."""
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    netloc = host if port is None or port == _DEFAULT_PORTS.get(scheme) else f"{host}:{port}"
    userinfo = parts.netloc.rpartition("@")[0]
    if userinfo:
        netloc = f"{userinfo}@{netloc}"
    return urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))


def normalize(url: Any, base_url: str) -> Optional[str]:
    """
    Resolve *url* against *base_url* into canonical form: scheme and host
    lower-cased, default port dropped, trailing slash stripped.

    Returns ``None`` for anything that cannot be turned into an absolute URL;
    callers drop such links without failing the crawl.
    """
    try:
        joined = _resolve(url, base_url)
    except MalformedUrlError as exc:
        logger.debug("Dropping link: %s", exc)
        return None
    return joined.rstrip("/") if joined.endswith("/") else joined


def origin_of(url: str) -> Origin:
    """Return the (scheme, host, port) triple of *url*; default ports are made explicit."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    try:
        port = parts.port
    except ValueError:
        port = None
    return scheme, (parts.hostname or "").lower(), port or _DEFAULT_PORTS.get(scheme)


def exclusion_reason(url: str, origin: Origin, patterns: Sequence[str] = ()) -> Optional[str]:
    """Name of the first exclusion rule *url* matches, or ``None`` when it may be crawled."""
    if origin_of(url) != origin:
        return "origin"
    path = urlsplit(url).path.lower()
    if path.endswith(tuple(EXCLUDED_EXTENSIONS)):
        return "extension"
    if "#" in url:
        return "fragment"
    if any(p and p in url for p in patterns):
        return "pattern"
    return None


def is_excluded(url: str, config: Any) -> bool:
    """Check *url* against the crawl's origin and exclusion patterns from *config*."""
    reason = exclusion_reason(url, config.origin_key, config.exclude)
    if reason is not None:
        logger.debug("Excluded (%s): %s", reason, url)
        return True
    return False
