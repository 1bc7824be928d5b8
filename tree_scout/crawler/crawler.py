from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from tree_scout.config import CrawlConfig
from tree_scout.crawler.extractor import extract
from tree_scout.crawler.fetcher import Fetcher
from tree_scout.crawler.models import DirectoryLink, FileLink, TypedLink

__all__ = ("CrawlStats", "TreeCrawler")


@dataclass(slots=True)
class CrawlStats:
    """Counters of one crawl; ``pending`` is 0 after a successful crawl."""
    dispatched: int = 0
    pending: int = 0
    files: int = 0
    duration: float = 0.0


@dataclass(slots=True)
class _Outcome:
    """What a fetch task delivers on the channel: its links or its error."""
    url: str
    links: List[TypedLink] = field(default_factory=list)
    error: Optional[Exception] = None


class TreeCrawler:
    """
    Concurrent crawler of a directory tree exposed as HTML listing pages.

    Every discovered directory becomes one fetch task. Tasks only put their
    outcome on a queue; the single loop in :meth:`crawl` owns the pending
    counter and the result list. The crawl ends when the counter is back to 0.
    Any failing fetch aborts the whole crawl.
    """

    def __init__(self, config: CrawlConfig, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None
        self.fetcher = fetcher
        self.stats = CrawlStats()
        self.logger = logging.getLogger("TreeScout")

    async def __aenter__(self) -> TreeCrawler:
        if self.fetcher is None:
            timeout = ClientTimeout(total=self.config.timeout)
            self.session = ClientSession(
                timeout=timeout,
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[FileLink]:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        self.logger.info("Crawl started: %s (extension %s)", self.config.root_url, self.config.extension)
        start = time.monotonic()
        self.stats = CrawlStats()

        channel: asyncio.Queue[_Outcome] = asyncio.Queue()
        tasks: Set[asyncio.Task] = set()
        semaphore = asyncio.Semaphore(self.config.max_concurrency) if self.config.max_concurrency else None
        results: List[FileLink] = []

        pending = self.stats.pending = 1
        self._dispatch(self.config.root_url, channel, tasks, semaphore)
        try:
            while pending > 0:
                outcome = await channel.get()
                if outcome.error is not None:
                    self.logger.error("Crawl aborted at %s: %s", outcome.url, outcome.error)
                    raise outcome.error
                for link in outcome.links:
                    if isinstance(link, DirectoryLink):
                        pending += 1
                        if self.config.dispatch_delay:
                            await asyncio.sleep(self.config.dispatch_delay)
                        self._dispatch(link.href, channel, tasks, semaphore)
                    elif isinstance(link, FileLink):
                        results.append(link)
                    else:
                        raise TypeError(f"unexpected link type {type(link).__name__}")
                pending -= 1
                self.stats.pending = pending
        finally:
            # only non-empty when the crawl is aborted or cancelled
            for task in list(tasks):
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        self.stats.files = len(results)
        self.stats.duration = time.monotonic() - start
        self.logger.info(
            "Done: %d files in %d directories in %.2f s",
            self.stats.files, self.stats.dispatched, self.stats.duration,
        )
        return results

    def _dispatch(
        self,
        url: str,
        channel: asyncio.Queue[_Outcome],
        tasks: Set[asyncio.Task],
        semaphore: Optional[asyncio.Semaphore],
    ) -> None:
        self.stats.dispatched += 1
        self.logger.debug("Dispatch #%d: %s", self.stats.dispatched, url)
        task = asyncio.create_task(self._run(url, channel, semaphore))
        tasks.add(task)
        task.add_done_callback(tasks.discard)

    async def _run(
        self,
        url: str,
        channel: asyncio.Queue[_Outcome],
        semaphore: Optional[asyncio.Semaphore],
    ) -> None:
        try:
            if semaphore is None:
                links = await extract(self.fetcher, url, self.config)
            else:
                async with semaphore:
                    links = await extract(self.fetcher, url, self.config)
        except Exception as exc:
            # every task delivers exactly one outcome
            channel.put_nowait(_Outcome(url, error=exc))
        else:
            channel.put_nowait(_Outcome(url, links))
