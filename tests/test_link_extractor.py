# File: tests/test_link_extractor.py
from a11y_scout.crawler.link_extractor import extract_links
from a11y_scout.crawler.models import RenderedPage


def test_extract_links_returns_raw_hrefs_in_document_order():
    html = """
    <html><body>
      <a href="/link1">L1</a>
      <a href=" /link2 ">L2</a>
      <a href="http://external.com">X</a>
      <a href="/link1">dup</a>
      <a>no href</a>
      <link href="/style.css" rel="stylesheet">
    </body></html>
    """
    links = extract_links(RenderedPage(url="http://example.com/", html=html), "http://example.com/")
    assert links == ["/link1", "/link2", "http://external.com"]


def test_extract_links_skips_non_navigational_schemes():
    html = (
        '<a href="mailto:a@b.c">m</a><a href="JavaScript:void(0)">j</a>'
        '<a href="tel:+100">t</a><a href="data:text/html,x">d</a><a href="">e</a>'
        '<a href="#top">top</a>'
    )
    links = extract_links(RenderedPage(url="http://example.com/", html=html), "http://example.com/")
    assert links == ["#top"]


def test_extract_links_empty_document():
    assert extract_links(RenderedPage(url="http://example.com/", html=""), "http://example.com/") == []


def test_extract_links_keeps_first_occurrence_order():
    html = '<a href="/z">z</a><a href="/a">a</a><a href="/z">z again</a><a href="/m">m</a>'
    links = extract_links(RenderedPage(url="http://example.com/", html=html), "http://example.com/")
    assert links == ["/z", "/a", "/m"]
