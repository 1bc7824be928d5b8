# File: tests/test_aggregator.py
import json
import random

from tree_scout.aggregator import aggregate_results, group_by_directory, sorted_groups
from tree_scout.crawler.crawler import CrawlStats
from tree_scout.crawler.models import DirectoryLink, FileLink

GH = "https://github.com/o/r"


def make_file(directory: str, name: str, ref: str = "main") -> FileLink:
    dir_href = f"{GH}/tree/{ref}/{directory}".rstrip("/")
    path = f"{directory}/{name}.md" if directory else f"{name}.md"
    return FileLink(name=name, href=f"{GH}/blob/{ref}/{path}", directory=DirectoryLink(directory, dir_href))


FILES = [
    make_file("", "README"),
    make_file("docs", "guide"),
    make_file("docs/api", "client"),
    make_file("docs", "install"),
    make_file("", "CHANGELOG"),
    make_file("docs/api", "server"),
]


def test_directory_equality_ignores_href():
    assert DirectoryLink("docs", "a") == DirectoryLink("docs", "b")
    assert hash(DirectoryLink("docs", "a")) == hash(DirectoryLink("docs", "b"))
    assert DirectoryLink("docs", "a") != DirectoryLink("doc", "a")


def test_group_keeps_insertion_order():
    groups = group_by_directory(FILES)
    assert [f.name for f in groups[DirectoryLink("docs", "")]] == ["guide", "install"]
    assert [f.name for f in groups[DirectoryLink("", "")]] == ["README", "CHANGELOG"]
    assert len(groups) == 3


def test_grouping_is_stable_under_reordering():
    expected = {d: set(fs) for d, fs in group_by_directory(FILES).items()}
    for seed in range(5):
        shuffled = FILES[:]
        random.Random(seed).shuffle(shuffled)
        assert {d: set(fs) for d, fs in group_by_directory(shuffled).items()} == expected


def test_same_directory_reached_by_other_ref_groups_together():
    files = [make_file("shared", "notes", ref="main"), make_file("shared", "notes", ref="dev")]
    groups = group_by_directory(files)
    assert list(groups) == [DirectoryLink("shared", "")]
    assert len(groups[DirectoryLink("shared", "")]) == 2


def test_group_empty():
    assert group_by_directory([]) == {}


def test_sorted_groups_orders_by_name():
    names = [d.name for d, _ in sorted_groups(group_by_directory(reversed(FILES)))]
    assert names == ["", "docs", "docs/api"]


def test_report_json():
    report = aggregate_results(GH, FILES, CrawlStats(dispatched=3, files=6))
    data = json.loads(report.json(pretty=True))
    assert data["root_url"] == GH
    assert [g["directory"] for g in data["groups"]] == ["", "docs", "docs/api"]
    assert data["groups"][1]["files"][0] == {"name": "guide", "url": f"{GH}/blob/main/docs/guide.md"}
    assert data["stats"]["dispatched"] == 3
