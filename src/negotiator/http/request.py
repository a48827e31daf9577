"""
=============================================================================
NEGOTIATION REQUEST
=============================================================================

The part of an HTTP request that content negotiation looks at: the
Accept-* headers and the X-Requested-With marker of Ajax requests.

=============================================================================
HEADERS THAT DRIVE NEGOTIATION
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                 PROACTIVE NEGOTIATION (RFC 7231 §3.4.1)            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  Accept:           text/html, application/json;q=0.9               │
    │                    └── which media types, in what preference       │
    │                                                                      │
    │  Accept-Language:  en-GB, en;q=0.8, fr;q=0.5                       │
    │                    └── which natural languages                      │
    │                                                                      │
    │  Accept-Charset:   utf-8                  (parsed, informational)  │
    │  Accept-Encoding:  gzip, br               (left to the transport)  │
    │                                                                      │
    │  X-Requested-With: XMLHttpRequest                                   │
    │                    └── an Ajax call: answer with JSON              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Header names are case-insensitive (RFC 7230), so they are stored with
lowercase keys. Repeated headers are combined with ", ", which for the
Accept-* headers means exactly the same thing as one comma-separated
header.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Tuple, Union

from ..header import (
    MediaRange,
    MediaRangeWeights,
    PrecedenceValue,
    TIERED,
    accept_or_default,
    parse_accept_charset,
    parse_accept_encoding,
    parse_accept_language,
)


X_REQUESTED_WITH = "x-requested-with"
XML_HTTP_REQUEST = "XMLHttpRequest"

HeaderSource = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def combine_headers(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """
    Normalize (name, value) pairs to a lowercase-keyed dict.

    Per RFC 7230, multiple headers with the same name are equivalent to
    a single header with comma-separated values:

        Accept: text/html   +   Accept: text/plain
        → {"accept": "text/html, text/plain"}
    """
    headers: Dict[str, str] = {}
    for name, value in pairs:
        name = name.strip().lower()
        value = value.strip()
        if name in headers:
            headers[name] += ", " + value
        else:
            headers[name] = value
    return headers


@dataclass
class HTTPRequest:
    """
    A request as seen by the negotiator.

    Attributes:
        method:  The HTTP method (informational; any method negotiates)
        path:    Request path (used in diagnostics only)
        headers: Header name → value, names lowercased on construction
    """

    method: str = "GET"
    path: str = "/"
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.headers = combine_headers(self.headers.items())

    @classmethod
    def from_headers(
        cls,
        headers: HeaderSource = (),
        method: str = "GET",
        path: str = "/",
    ) -> "HTTPRequest":
        """
        Build a request from a header mapping or (name, value) pairs.

        Example:
            request = HTTPRequest.from_headers({"Accept": "text/html"})
            request.accept  # "text/html"
        """
        if isinstance(headers, Mapping):
            headers = headers.items()
        return cls(method=method, path=path, headers=combine_headers(headers))

    def get_header(self, name: str, default: str = "") -> str:
        """Get a header value (case-insensitive lookup)."""
        return self.headers.get(name.lower(), default)

    # =========================================================================
    # RAW ACCEPT-* HEADERS
    # =========================================================================

    @property
    def accept(self) -> str:
        return self.get_header("accept")

    @property
    def accept_language(self) -> str:
        return self.get_header("accept-language")

    @property
    def accept_charset(self) -> str:
        return self.get_header("accept-charset")

    @property
    def accept_encoding(self) -> str:
        return self.get_header("accept-encoding")

    @property
    def is_ajax(self) -> bool:
        """True if this is an XMLHttpRequest; see is_ajax()."""
        return is_ajax(self)

    # =========================================================================
    # PARSED, RANKED PREFERENCES
    # =========================================================================

    def media_ranges(self, weights: MediaRangeWeights = TIERED) -> list[MediaRange]:
        """Ranked Accept media ranges ("*/*" if the header is absent)."""
        return accept_or_default(self.accept, weights)

    def languages(self) -> list[PrecedenceValue]:
        """Ranked Accept-Language values ("*" if the header is absent)."""
        return parse_accept_language(self.accept_language)

    def charsets(self) -> list[PrecedenceValue]:
        return parse_accept_charset(self.accept_charset)

    def encodings(self) -> list[PrecedenceValue]:
        return parse_accept_encoding(self.accept_encoding)


def is_ajax(request: HTTPRequest) -> bool:
    """
    Test whether a request carries the Ajax header.

    The header must be present exactly once, with the exact value
    "XMLHttpRequest". A repeated header arrives combined ("XMLHttpRequest,
    XMLHttpRequest") and does not count.
    """
    return request.headers.get(X_REQUESTED_WITH) == XML_HTTP_REQUEST
