"""tree_scout.aggregator: grouping crawl results by directory and building the report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, TypedDict

from tree_scout.crawler.crawler import CrawlStats
from tree_scout.crawler.models import DirectoryLink, FileLink


class FileInfo(TypedDict):
    """A tracked file as written to the JSON report."""

    name: str
    url: str


class GroupInfo(TypedDict):
    """A directory and its files as written to the JSON report."""

    directory: str
    url: str
    files: List[FileInfo]


def group_by_directory(files: Iterable[FileLink]) -> Dict[DirectoryLink, List[FileLink]]:
    """Partition *files* by parent directory, keeping discovery order inside a group."""
    grouped: Dict[DirectoryLink, List[FileLink]] = {}
    for f in files:
        grouped.setdefault(f.directory, []).append(f)
    return grouped


def sorted_groups(groups: Dict[DirectoryLink, List[FileLink]]) -> List[tuple[DirectoryLink, List[FileLink]]]:
    """Groups ordered by directory name, so reports do not depend on fetch timing."""
    return sorted(groups.items(), key=lambda item: item[0].name)


@dataclass(slots=True)
class CrawlReport:
    """Result of a crawl: flat file list, groups and counters."""

    root_url: str
    files: List[FileLink] = field(default_factory=list)
    groups: Dict[DirectoryLink, List[FileLink]] = field(default_factory=dict)
    stats: Optional[CrawlStats] = None

    def as_dict(self) -> Dict[str, Any]:
        groups: List[GroupInfo] = [
            {
                "directory": directory.name,
                "url": directory.href,
                "files": [{"name": f.name, "url": f.href} for f in files],
            }
            for directory, files in sorted_groups(self.groups)
        ]
        return {
            "root_url": self.root_url,
            "groups": groups,
            "stats": asdict(self.stats) if self.stats else {},
        }

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(root_url: str, files: List[FileLink], stats: Optional[CrawlStats] = None) -> CrawlReport:
    """Build a :class:`CrawlReport` from the crawler output."""
    return CrawlReport(root_url=root_url, files=files, groups=group_by_directory(files), stats=stats)
