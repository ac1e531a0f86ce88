# a11y_scout/crawler/link_extractor.py
"""
Link extraction from a rendered page for A11yScout.
"""
from __future__ import annotations

from typing import Dict, List

from bs4 import BeautifulSoup, SoupStrainer
from bs4.element import Tag

from a11y_scout.crawler.models import RenderedPage
from a11y_scout.logger import logger

_LINK_STRAINER = SoupStrainer("a", href=True)
_SKIP_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def extract_links(page: RenderedPage, base_url: str) -> List[str]:
    """
    Return the raw ``href`` values of all ``<a href>`` elements, deduplicated,
    in document order.

    Hrefs are left unresolved; the crawler resolves them against *base_url*
    when normalising. mailto:, javascript:, tel: and data: links are ignored.
    """
    soup = BeautifulSoup(page.html, "html.parser", parse_only=_LINK_STRAINER)
    links: Dict[str, None] = {}
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIP_SCHEMES):
            continue
        links.setdefault(raw)
    logger.debug("Found %d links on %s", len(links), base_url)
    return list(links)


__all__ = ["extract_links"]
