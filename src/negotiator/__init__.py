"""
=============================================================================
NEGOTIATOR - HTTP Content Negotiation
=============================================================================

Picks the best representation of a resource for a request, from the
request's Accept and Accept-Language headers (RFC 7231 §5.3) and the
representations the server offers, then writes it as JSON, XML, CSV or
plain text.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      CONTENT NEGOTIATION                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. HEADER PARSING                                                 │
    │      - Weighted lists: value;param=x;q=0.8;ext=y                   │
    │      - Media ranges ranked by quality, then specificity            │
    │      - Lenient: malformed input never raises                       │
    │                                                                      │
    │   2. MATCHING                                                       │
    │      - Exact pass, then wildcard pass                               │
    │      - q=0 exclusions                                               │
    │      - Language tag prefixes (en ~ en-GB)                          │
    │      - Ajax requests answered with JSON                             │
    │                                                                      │
    │   3. RENDERING                                                      │
    │      - Pluggable response processors                                │
    │      - Lazy data providers, called for the chosen offer only       │
    │      - 406 and 500 through an injectable error handler             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    negotiator/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI (python -m negotiator)
    ├── negotiator.py        # Negotiator, negotiate()
    ├── config.py            # NegotiatorConfig dataclass
    ├── exceptions.py        # NegotiationError and subclasses
    ├── logging.py           # Diagnostics printers
    ├── offer.py             # Offer, data providers
    ├── render.py            # Renderer, Unacceptable
    ├── core/
    │   └── matcher.py       # best_match(), ajax_match()
    ├── header/
    │   ├── precedence.py    # Accept-Language/-Charset/-Encoding
    │   └── media_range.py   # Accept
    ├── http/
    │   ├── request.py       # HTTPRequest
    │   ├── response.py      # HTTPResponse, http_error()
    │   └── status_codes.py  # HTTPStatus
    └── processor/
        ├── base.py          # ResponseProcessor
        ├── json_processor.py
        ├── xml_processor.py
        ├── csv_processor.py
        └── txt_processor.py

=============================================================================
QUICK START
=============================================================================

    from negotiator import HTTPRequest, HTTPResponse, Negotiator, Offer
    from negotiator.processor import CSVProcessor

    negotiator = Negotiator.with_json_and_xml(CSVProcessor())

    request = HTTPRequest.from_headers({"Accept": "text/csv, application/json;q=0.5"})
    response = HTTPResponse()
    negotiator.negotiate(request, response, Offer(data=[["Joe", "Bloggs"]]))

    response.headers["Content-Type"]   # "text/csv"
    response.text                      # "Joe,Bloggs\\n"

=============================================================================
"""

__version__ = "1.0.0"

from .config import NegotiatorConfig
from .core.matcher import Match
from .exceptions import (
    DataProviderError,
    NegotiationError,
    NotAcceptableError,
    ProcessingError,
)
from .http import HTTPRequest, HTTPResponse, HTTPStatus, http_error, is_ajax
from .negotiator import Negotiator, negotiate
from .offer import (
    DataProvider,
    LanguageDataProvider,
    Offer,
    data_provider,
    language_data_provider,
)
from .render import Render, Renderer, Unacceptable

__all__ = [
    "__version__",

    # Negotiation
    "Negotiator",
    "NegotiatorConfig",
    "negotiate",
    "Match",

    # Offers
    "Offer",
    "DataProvider",
    "LanguageDataProvider",
    "data_provider",
    "language_data_provider",

    # Rendering
    "Render",
    "Renderer",
    "Unacceptable",

    # HTTP
    "HTTPRequest",
    "HTTPResponse",
    "HTTPStatus",
    "http_error",
    "is_ajax",

    # Errors
    "NegotiationError",
    "NotAcceptableError",
    "ProcessingError",
    "DataProviderError",
]
