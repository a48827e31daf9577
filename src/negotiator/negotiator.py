"""
=============================================================================
THE NEGOTIATOR
=============================================================================

Ties everything together: parses the request's Accept headers, finds the
best offer, and has the right processor write the response.

=============================================================================
REQUEST FLOW
=============================================================================

    HTTPRequest ──► Negotiator.negotiate(request, response, *offers)
                        │
                        ▼
              ┌───────────────────┐   X-Requested-With: XMLHttpRequest
              │    Ajax request?  │──────────────────────────────┐
              └─────────┬─────────┘                              │
                        │ no (or no Ajax responder/offer)        ▼
                        ▼                               first JSON-able offer
              ┌───────────────────┐                   + first Ajax responder
              │ parse + rank      │                              │
              │ Accept,           │                              │
              │ Accept-Language   │                              │
              └─────────┬─────────┘                              │
                        ▼                                        │
              ┌───────────────────┐                              │
              │   best_match()    │                              │
              └─────────┬─────────┘                              │
                ┌───────┴────────┐                               │
                ▼                ▼                               │
           no match           Match ◄────────────────────────────┘
                │                │
                ▼                ▼
          Unacceptable        Renderer ── resolve data ── processor.process()
          (406 via the                      │
           error handler)                   └── raises? → 500 + ProcessingError

=============================================================================
USAGE
=============================================================================

    negotiator = Negotiator.with_json_and_xml(CSVProcessor())

    def get_user(request, response):
        user = User("Joe", "Bloggs")
        negotiator.negotiate(request, response, Offer(data=user))

    # Different data per format, built only when chosen:
    negotiator.negotiate(
        request, response,
        Offer("text/csv", data=data_provider(build_csv_rows)),
        Offer("application/json", data=user),
    )

A Negotiator is immutable. add() and the with_*() methods return new
negotiators, so one instance can be shared by all request threads.

=============================================================================
INTERVIEW INSIGHT
=============================================================================

Q: "RFC 7231 lets a server ignore Accept and send its default format.
   Why answer 406 instead?"

A: "Both are allowed. A 406 tells the client precisely that it asked for
   something we do not have, which is easier to debug than a body the
   client cannot parse. A server that prefers the lenient behaviour can
   offer a catch-all Offer(data=...) as its last offer."

=============================================================================
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from .config import NegotiatorConfig
from .core.matcher import Match, ajax_match, best_match
from .exceptions import NegotiationError, NotAcceptableError, ProcessingError
from .http.request import HTTPRequest
from .http.response import HTTPResponse, http_error
from .http.status_codes import HTTPStatus
from .logging import Printer, logging_printer
from .offer import Offer, media_types
from .processor import JSONProcessor, ResponseProcessor, XMLProcessor
from .render import ErrorHandler, Render, Renderer, Unacceptable


INTERNAL_SERVER_ERROR_MESSAGE = "Internal Server Error"


@dataclass(frozen=True)
class Negotiator:
    """
    Content negotiation with a fixed list of response processors.

    Attributes:
        processors:    Response processors, in order of preference
        error_handler: Writes 406 and 500 responses
        printer:       Receives diagnostics, see negotiator.logging
        config:        Matching policy and limits
    """

    processors: Tuple[ResponseProcessor, ...] = ()
    error_handler: ErrorHandler = http_error
    printer: Printer = field(default_factory=logging_printer, compare=False)
    config: NegotiatorConfig = field(default_factory=NegotiatorConfig)

    def __post_init__(self):
        self.config.validate()
        object.__setattr__(self, "processors", tuple(self.processors))

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def of(cls, *processors: ResponseProcessor, **kwargs: Any) -> "Negotiator":
        """
        Create a negotiator from processors given as arguments.

        Example:
            Negotiator.of(CSVProcessor(), TXTProcessor())
        """
        return cls(processors=processors, **kwargs)

    @classmethod
    def with_json_and_xml(cls, *processors: ResponseProcessor, **kwargs: Any) -> "Negotiator":
        """
        Create a negotiator with custom processors first, then JSON and XML.

        The custom processors come first, so they win for the media types
        they share with JSON and XML, and the first of them is the default
        for "*/*".
        """
        return cls(processors=processors + (JSONProcessor(), XMLProcessor()), **kwargs)

    def add(self, *processors: ResponseProcessor) -> "Negotiator":
        """Return a new negotiator with more processors appended."""
        return replace(self, processors=self.processors + processors)

    def with_error_handler(self, error_handler: ErrorHandler) -> "Negotiator":
        """Return a new negotiator using another error handler."""
        return replace(self, error_handler=error_handler)

    def with_logger(self, printer: Printer) -> "Negotiator":
        """Return a new negotiator sending diagnostics to printer."""
        return replace(self, printer=printer)

    def with_config(self, config: NegotiatorConfig) -> "Negotiator":
        """Return a new negotiator with another (validated) config."""
        return replace(self, config=config)

    # =========================================================================
    # SELECTION
    # =========================================================================

    def _context(self, request: HTTPRequest, offers: Sequence[Offer]) -> Dict[str, Any]:
        return {
            "accept": request.accept,
            "accept_language": request.accept_language,
            "offers": media_types(offers),
        }

    def _matched(self, match: Match, context: Dict[str, Any]) -> Match:
        context.update(
            via=match.via,
            media_type=match.media_type,
            language=match.language,
            processor=match.processor.name,
        )
        self.printer(logging.DEBUG, "matched", context)
        return match

    def select(self, request: HTTPRequest, *offers: Offer) -> Optional[Match]:
        """
        Find the best offer and processor for a request.

        Returns None when nothing is acceptable. Data providers are not
        called.
        """
        context = self._context(request, offers)

        if self.config.ajax and request.is_ajax:
            match = ajax_match(offers, self.processors)
            if match is not None:
                return self._matched(match, context)
            self.printer(logging.DEBUG, "no ajax responder or offer", context)

        match = best_match(
            request.media_ranges(self.config.media_range_weights),
            request.languages(),
            offers,
            self.processors,
            strict_language=self.config.strict_language_exclusion,
        )

        if match is None:
            self.printer(logging.INFO, "not acceptable", context)
            return None
        return self._matched(match, context)

    def select_or_raise(self, request: HTTPRequest, *offers: Offer) -> Match:
        """Like select(), but raises NotAcceptableError instead of returning None."""
        match = self.select(request, *offers)
        if match is None:
            raise NotAcceptableError(self.config.not_acceptable_message)
        return match

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render(self, request: HTTPRequest, *offers: Offer) -> Render:
        """Negotiate, returning a Renderer or an Unacceptable."""
        match = self.select(request, *offers)
        if match is None:
            return Unacceptable(self.error_handler, self.config.not_acceptable_message)
        return Renderer(match, self.config.max_provider_depth)

    def negotiate(
        self,
        request: HTTPRequest,
        response: HTTPResponse,
        *offers: Offer,
    ) -> Optional[Match]:
        """
        Negotiate and write the response.

        Returns:
            The Match, or None if the response is a 406.

        Raises:
            ProcessingError: A processor or data provider failed. A 500
                response has already been written; the original exception
                is chained.
            DataProviderError: A data provider chain did not resolve (also
                after writing a 500).
        """
        render = self.render(request, *offers)

        try:
            render.render(response)
        except Exception as exc:
            context = self._context(request, offers)
            if isinstance(render, Renderer):
                context["processor"] = render.match.processor.name
            context["error"] = f"{type(exc).__name__}: {exc}"
            self.printer(logging.ERROR, "processing failed", context)

            self.error_handler(
                response, INTERNAL_SERVER_ERROR_MESSAGE, HTTPStatus.INTERNAL_SERVER_ERROR
            )
            if isinstance(exc, NegotiationError):
                raise
            raise ProcessingError(f"{type(exc).__name__}: {exc}") from exc

        if isinstance(render, Renderer):
            return render.match
        return None


# A negotiator with just JSON and XML, used by the module-level negotiate()
DEFAULT_NEGOTIATOR = Negotiator.with_json_and_xml()


def negotiate(request: HTTPRequest, response: HTTPResponse, *offers: Offer) -> Optional[Match]:
    """
    Negotiate with JSON and XML only.

    Example:
        negotiate(request, response, Offer(data={"name": "Joe"}))
    """
    return DEFAULT_NEGOTIATOR.negotiate(request, response, *offers)
