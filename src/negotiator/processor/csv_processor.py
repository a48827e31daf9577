"""
CSV response processor.

Accepted data shapes:

    "Joe Bloggs"                    → Joe Bloggs
    ["a", 1, True]                  → a,1,true
    [["a", 1], ["b", 2]]            → a,1
                                      b,2
    User(name="Joe", age=42)        → Joe,42
    [User(...), User(...)]          → one row per user

Booleans are written as true/false and None as an empty cell. Every row
ends with "\\n".
"""

import csv
import dataclasses
import io
from dataclasses import dataclass
from typing import Any, List, Sequence

from ..http.response import HTTPResponse
from .base import ResponseProcessor, no_content


DEFAULT_CSV_CONTENT_TYPE = "text/csv"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_row(value: Any) -> bool:
    return isinstance(value, (list, tuple)) or (
        dataclasses.is_dataclass(value) and not isinstance(value, type)
    )


def _row(value: Any) -> List[str]:
    if dataclasses.is_dataclass(value):
        return [_cell(getattr(value, f.name)) for f in dataclasses.fields(value)]
    return [_cell(item) for item in value]


def to_rows(data: Any) -> List[List[str]]:
    """Convert data to a list of rows of cell strings."""
    if isinstance(data, str):
        return [[data]]
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return [_row(data)]
    if isinstance(data, (list, tuple)):
        if data and all(_is_row(item) for item in data):
            return [_row(item) for item in data]
        return [_row(data)] if data else []
    raise TypeError(f"Unsupported type for CSV: {type(data).__name__}")


@dataclass(frozen=True)
class CSVProcessor(ResponseProcessor):
    """Serializes data as comma-separated values (or another delimiter)."""

    content_type: str = DEFAULT_CSV_CONTENT_TYPE
    comma: str = ","

    def can_process(self, media_range: str, language: str) -> bool:
        media_range = media_range.lower()
        return media_range == "text/csv" or media_range == "text/*"

    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        if data is None:
            no_content(response)
            return

        rows: Sequence[List[str]] = to_rows(data)

        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self.comma, lineterminator="\n")
        writer.writerows(rows)

        response.set_content_type(self.content_type)
        response.write(buffer.getvalue())
