# tree_scout/report/json_report.py

"""
JSON report for TreeScout.

Serializes a CrawlReport to a file.
"""
import json
from pathlib import Path

from tree_scout.aggregator import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Save *report* as JSON at the given path.

    :param report: CrawlReport of a finished crawl
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from tree_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/setters.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.as_dict(), f, ensure_ascii=False, indent=2)

    return output
