"""
Page extraction: turn one listing page into the typed links it contains.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.exceptions import ParserRejectedMarkup
from bs4.element import Tag

from tree_scout.config import CrawlConfig
from tree_scout.crawler.classifier import classify
from tree_scout.crawler.fetcher import Fetcher
from tree_scout.crawler.models import PageData, TypedLink
from tree_scout.errors import ParseError

__all__ = ["extract_links", "extract"]


def extract_links(page: PageData, config: CrawlConfig) -> List[TypedLink]:
    """
    Classify every ``<a>`` of *page* in document order.

    Anchors that are neither directory nor tracked-file rows are dropped.
    """
    try:
        soup = BeautifulSoup(page.content, "html.parser")
    except (ParserRejectedMarkup, AssertionError, TypeError, ValueError) as exc:
        raise ParseError(page.url, exc) from exc

    patterns = config.ignore_patterns
    links: List[TypedLink] = []
    for tag in soup.find_all("a"):
        if not isinstance(tag, Tag):
            continue
        link = classify(
            tag,
            config.extension,
            patterns,
            origin=config.origin,
            style_class=config.style_class,
        )
        if link is not None:
            links.append(link)
    return links


async def extract(fetcher: Fetcher, url: str, config: CrawlConfig) -> List[TypedLink]:
    """Fetch *url* once and return its typed links."""
    page = await fetcher.fetch(url)
    return extract_links(page, config)
