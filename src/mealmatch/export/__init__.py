"""Export and formatting of generated plans."""

from mealmatch.export.formatters import (
    JSONFormatter,
    MarkdownFormatter,
    TableFormatter,
    format_plan,
    targets_to_dict,
)

__all__ = [
    "JSONFormatter",
    "MarkdownFormatter",
    "TableFormatter",
    "format_plan",
    "targets_to_dict",
]
