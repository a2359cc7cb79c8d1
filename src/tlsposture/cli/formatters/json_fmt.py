"""JSON formatter for CLI output."""

import json
from pathlib import Path

from rich.console import Console

from tlsposture.models import PostureReport


def format_json(console: Console, report: PostureReport) -> None:
    """Display a report as JSON."""
    console.print_json(report.model_dump_json(by_alias=True, indent=2))


def export_json(report: PostureReport, path: Path | str) -> None:
    """Export a report to a JSON file."""
    with open(path, "w") as f:
        json.dump(report.to_json_dict(), f, indent=2, default=str)
