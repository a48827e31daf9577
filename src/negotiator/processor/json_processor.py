"""
JSON response processor.

Handles application/json, application/json-* and any +json structured
syntax suffix (application/calendar+json, application/hal+json, ...).
It is also the processor that answers Ajax requests.
"""

import dataclasses
import json
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar, Optional, Union

from ..http.response import HTTPResponse
from .base import ResponseProcessor, no_content, write_with_newline


DEFAULT_JSON_CONTENT_TYPE = "application/json"


def _to_json(value: Any) -> Any:
    """json.dumps() fallback for values the json module does not know."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@dataclass(frozen=True)
class JSONProcessor(ResponseProcessor):
    """
    Serializes data as JSON.

    With indent=None (the default) the output is dense:
        {"name":"Joe Bloggs"}

    With indent="  ":
        {
          "name": "Joe Bloggs"
        }

    Output always ends with a newline.
    """

    content_type: str = DEFAULT_JSON_CONTENT_TYPE
    indent: Optional[Union[str, int]] = None

    ajax_responder: ClassVar[bool] = True

    def can_process(self, media_range: str, language: str) -> bool:
        media_range = media_range.lower()
        return (
            media_range == "application/json"
            or media_range.startswith("application/json-")
            or media_range.endswith("+json")
        )

    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        if data is None:
            no_content(response)
            return

        # Encode before touching the response, so a failure leaves it clean
        if self.indent is None:
            text = json.dumps(data, separators=(",", ":"), default=_to_json)
        else:
            text = json.dumps(data, indent=self.indent, default=_to_json)

        response.set_content_type(self.content_type)
        write_with_newline(response, text)
