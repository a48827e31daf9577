"""
Plain text response processor.

Writes strings and bytes as they are, numbers with str(), and any other
object whose class defines its own __str__. Objects that would only
print their default representation are rejected.
"""

import numbers
from dataclasses import dataclass
from typing import Any

from ..http.response import HTTPResponse
from .base import ResponseProcessor, no_content, write_with_newline


DEFAULT_TXT_CONTENT_TYPE = "text/plain"


def has_own_str(value: Any) -> bool:
    """True if some class below object in the MRO defines __str__."""
    return any("__str__" in vars(klass) for klass in type(value).__mro__[:-1])


@dataclass(frozen=True)
class TXTProcessor(ResponseProcessor):
    """Writes data as plain text, followed by a newline."""

    content_type: str = DEFAULT_TXT_CONTENT_TYPE

    def can_process(self, media_range: str, language: str) -> bool:
        media_range = media_range.lower()
        return media_range == "text/plain" or media_range == "text/*"

    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        if data is None:
            no_content(response)
            return

        if isinstance(data, (str, bytes)):
            text = data
        elif isinstance(data, numbers.Number) or has_own_str(data):
            text = str(data)
        else:
            raise TypeError(f"Unsupported type for TXT: {type(data).__name__}")

        response.set_content_type(self.content_type)
        write_with_newline(response, text)
