"""tree_scout.report.markdown_report: markdown checklist rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from tree_scout.aggregator import CrawlReport, sorted_groups

_TEMPLATE_DIR = Path(__file__).parent / "templates"
_TEMPLATE_NAME = "checklist.md.j2"


def _environment(template_dir: Union[Path, str, None]) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir or _TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_markdown(report: CrawlReport, template_dir: Union[Path, str, None] = None) -> str:
    """Render *report* as a checklist: one heading per directory, one item per file.

    Args:
        report: aggregated crawl result.
        template_dir: directory holding ``checklist.md.j2``; the bundled
            template is used when omitted.

    Returns:
        The markdown text.
    """
    template = _environment(template_dir).get_template(_TEMPLATE_NAME)
    return template.render(groups=sorted_groups(report.groups))


def write_markdown(
    report: CrawlReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Render *report* and save it to *output_path*, creating parent directories."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_markdown(report, template_dir), encoding="utf-8")
    return output
