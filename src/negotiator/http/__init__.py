"""
=============================================================================
HTTP MODEL PACKAGE
=============================================================================

The request and response shapes the negotiator works with. They are thin
on purpose: adapt your framework's request into an HTTPRequest (only the
headers matter) and copy the HTTPResponse back out after negotiation.

    request.py        HTTPRequest, is_ajax(), header normalization
    response.py       HTTPResponse (the processors' output sink), http_error()
    status_codes.py   HTTPStatus with reason phrases

=============================================================================
"""

from .request import (
    HTTPRequest,
    combine_headers,
    is_ajax,
)
from .response import (
    HTTPResponse,
    http_error,
)
from .status_codes import HTTPStatus

__all__ = [
    # Request
    "HTTPRequest",
    "combine_headers",
    "is_ajax",

    # Response
    "HTTPResponse",
    "http_error",

    # Status codes
    "HTTPStatus",
]
