"""
Exceptions raised by the negotiator.

Each exception carries the HTTP status code that should be returned to
the client, the same way the request parser's errors do:

    406 Not Acceptable          - NotAcceptableError
    500 Internal Server Error   - ProcessingError, DataProviderError

Malformed request headers never raise; they are parsed leniently.
"""

from typing import Optional


class NegotiationError(Exception):
    """
    Base class for negotiation failures.

    Attributes:
        status_code: HTTP status to return to the client
    """

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class NotAcceptableError(NegotiationError):
    """No offer is acceptable to the client."""

    status_code = 406


class ProcessingError(NegotiationError):
    """
    A response processor failed to write the chosen representation.

    The original exception is available as __cause__. Negotiation is
    never retried with another processor.
    """

    status_code = 500


class DataProviderError(NegotiationError):
    """A chain of data providers did not resolve to a value."""

    status_code = 500
