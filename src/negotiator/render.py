"""
=============================================================================
RENDERERS
=============================================================================

A negotiation ends in one of two renderers:

    Negotiator.render(request, *offers)
            │
            ├── a match ──────► Renderer       write the offer's data
            │
            └── no match ─────► Unacceptable   406 via the error handler

Both have the same two methods, so a web framework can call them without
knowing which one it got:

    write_content_type(response)   set the headers only
    render(response)               write the whole response

The offer's data is only resolved inside Renderer.render(), so expensive
data providers run once, for the chosen offer only.

=============================================================================
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from .core.matcher import Match
from .http.response import HTTPResponse
from .http.status_codes import HTTPStatus
from .offer import DEFAULT_MAX_PROVIDER_DEPTH


ErrorHandler = Callable[[HTTPResponse, str, int], None]

VARY_HEADERS = ("Accept", "Accept-Language")


class Render(ABC):
    """The outcome of a negotiation, ready to be written."""

    @abstractmethod
    def write_content_type(self, response: HTTPResponse) -> None:
        """Write the negotiated headers."""

    @abstractmethod
    def render(self, response: HTTPResponse) -> None:
        """Write the whole response."""


@dataclass(frozen=True)
class Renderer(Render):
    """Writes a matched offer with its processor."""

    match: Match
    max_provider_depth: int = DEFAULT_MAX_PROVIDER_DEPTH

    def write_content_type(self, response: HTTPResponse) -> None:
        response.set_content_type(self.match.processor.content_type)
        if self.match.language:
            response.set_header("Content-Language", self.match.language)
        response.add_vary(*VARY_HEADERS)

    def render(self, response: HTTPResponse) -> None:
        """
        Resolve the offer's data, then let the processor write it.

        Raises whatever the data providers or the processor raise.
        """
        data = self.match.offer.resolve(self.match.language, self.max_provider_depth)
        self.write_content_type(response)
        self.match.processor.process(response, self.match.offer.template, data)


@dataclass(frozen=True)
class Unacceptable(Render):
    """Reports 406 Not Acceptable through an error handler."""

    error_handler: ErrorHandler
    message: str

    def write_content_type(self, response: HTTPResponse) -> None:
        pass

    def render(self, response: HTTPResponse) -> None:
        self.error_handler(response, self.message, HTTPStatus.NOT_ACCEPTABLE)
