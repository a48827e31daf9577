"""
=============================================================================
RESPONSE PROCESSOR BASE CLASS
=============================================================================

A response processor turns the chosen offer's data into a response body
in one format. The negotiator asks each registered processor, in order,
whether it can produce the negotiated media type and language; the first
one that says yes writes the response.

=============================================================================
THE PROCESSOR CONTRACT
=============================================================================

    class MyProcessor(ResponseProcessor):
        content_type: str = "text/vnd.mine"

        def can_process(self, media_range: str, language: str) -> bool:
            return media_range == "text/vnd.mine"

        def process(self, response, template, data) -> None:
            response.set_content_type(self.content_type)
            response.write(render_mine(data))

    can_process()   A pure predicate: "can I produce this media type (in
                    this language)?". language is "" when none was
                    negotiated.
    process()       Writes the body. Raise on failure; the negotiator
                    turns the exception into a 500.
    ajax_responder  Class flag: answers Ajax (XMLHttpRequest) calls.

Processors are frozen dataclasses. with_content_type() returns a changed
copy, so one processor instance can be shared by every request.

=============================================================================
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Union

from ..http.response import HTTPResponse
from ..http.status_codes import HTTPStatus


@dataclass(frozen=True)
class ResponseProcessor(ABC):
    """
    Abstract base class for response processors.

    Attributes:
        content_type: The Content-Type header value this processor writes
    """

    content_type: str = "application/octet-stream"

    # Set to True by processors that answer Ajax requests
    ajax_responder: ClassVar[bool] = False

    @abstractmethod
    def can_process(self, media_range: str, language: str) -> bool:
        """Whether this processor can produce the media type/language."""

    @abstractmethod
    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        """Write data to the response. Raises on failure."""

    def with_content_type(self, content_type: str) -> "ResponseProcessor":
        """
        Return a copy of this processor that writes another Content-Type.

        Example:
            calendar = JSONProcessor().with_content_type("application/calendar+json")
        """
        return replace(self, content_type=content_type)

    @property
    def name(self) -> str:
        """A short name for diagnostics."""
        return type(self).__name__


def no_content(response: HTTPResponse) -> None:
    """Mark the response 204 No Content (the data resolved to None)."""
    response.set_status(HTTPStatus.NO_CONTENT)


def write_with_newline(response: HTTPResponse, data: Union[str, bytes]) -> None:
    response.write(data)
    response.write(b"\n")
