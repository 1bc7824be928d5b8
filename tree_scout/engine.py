"""tree_scout.engine: runs a crawl and aggregates its result."""

from __future__ import annotations

from tree_scout.aggregator import CrawlReport, aggregate_results
from tree_scout.config import CrawlConfig
from tree_scout.crawler.crawler import TreeCrawler
from tree_scout.logger import logger

__all__ = ["start_crawl"]


async def start_crawl(config: CrawlConfig) -> CrawlReport:
    """
    Crawl ``config.root_url`` and return the grouped report.

    Parameters
    ----------
    config : CrawlConfig
        Validated crawl configuration.

    Returns
    -------
    CrawlReport
        Files found, grouped by directory, plus crawl counters.

    Errors from the crawl (FetchError, ParseError) propagate unchanged.
    """
    async with TreeCrawler(config) as crawler:
        files = await crawler.crawl()
    report = aggregate_results(config.root_url, files, crawler.stats)
    logger.debug("Grouped %d files into %d directories", len(files), len(report.groups))
    return report
