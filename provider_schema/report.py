"""
report.py - human-facing renderings of validation results and definitions.

Public API
----------
format_errors(result)     : ``Errors:`` header plus one ``" - message"`` line
                            per error.
errors_frame(result)      : the same errors as a pandas DataFrame.
to_markdown_card(data)    : Markdown card for :meth:`ProviderDefinition.describe`
                            output; lists of rows become tables.
"""

from __future__ import annotations
from typing import Any, Mapping, Sequence

import pandas as pd

from .utils import UNDEFINED
from .validator import ValidationResult

__all__ = ["format_errors", "to_markdown_card", "errors_frame"]

ERROR_COLUMNS = ["path", "message", "expected", "value"]

# --------------------------------------------------------------------------- #
# Errors                                                                      #
# --------------------------------------------------------------------------- #

def format_errors(result: ValidationResult) -> str:
    """Render every error of *result* as ``" - <message>"`` under a header.

    Returns an empty string for a valid result.
    """
    if result.valid:
        return ""
    return "\n".join(["Errors:", *(f" - {e.message}" for e in result.errors)])


def errors_frame(result: ValidationResult) -> pd.DataFrame:
    """One row per error with columns ``path, message, expected, value``."""
    rows = [
        {
            "path": e.path,
            "message": e.message,
            "expected": e.expected,
            "value": None if e.value is UNDEFINED else e.value,
        }
        for e in result.errors
    ]
    return pd.DataFrame(rows, columns=ERROR_COLUMNS, dtype=object)

# --------------------------------------------------------------------------- #
# Definition card                                                             #
# --------------------------------------------------------------------------- #

def _cell(v: Any) -> str:
    """Plain-text rendering of one scalar for a card line or table cell."""
    if isinstance(v, bool):
        return str(v).lower()
    if v is None or v is UNDEFINED:
        return "null"
    return str(v).replace("|", "\\|")


def _table(rows: Sequence[Mapping[str, Any]]) -> list[str]:
    """Markdown table; columns follow the keys of the first row."""
    columns = list(rows[0])
    lines = [
        "| " + " | ".join(columns) + " |",
        "|" + "|".join("---" for _ in columns) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(row.get(c)) for c in columns) + " |")
    return lines


def _section_body(value: Any) -> list[str]:
    if isinstance(value, Mapping):
        return [f"- **{k}**: {_cell(v)}" for k, v in value.items()]
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if value and all(isinstance(item, Mapping) for item in value):
            return _table(value)
        return [f"- {_cell(item)}" for item in value]
    return [_cell(value)]


def to_markdown_card(data: Mapping[str, Any], *, heading_level: int = 2) -> str:
    """
    Convert *data* into a Markdown card, one section per top-level key.

    Mappings render as ``- **key**: value`` lines, sequences of mappings
    as a table and other sequences as bullets.
    """
    h = "#" * heading_level
    sections = []
    for key, value in data.items():
        title = key.replace("_", " ").title()
        sections.append("\n".join([f"{h} {title}", *_section_body(value)]))
    return "\n\n".join(sections)
