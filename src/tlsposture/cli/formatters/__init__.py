"""CLI output formatters."""

from tlsposture.cli.formatters.table import format_report
from tlsposture.cli.formatters.json_fmt import format_json

__all__ = ["format_report", "format_json"]
