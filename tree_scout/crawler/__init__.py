"""tree_scout.crawler: classification, extraction and concurrent traversal of listing pages."""

from tree_scout.crawler.crawler import CrawlStats, TreeCrawler
from tree_scout.crawler.models import DirectoryLink, FileLink, PageData, TypedLink

__all__ = ["CrawlStats", "TreeCrawler", "DirectoryLink", "FileLink", "PageData", "TypedLink"]
