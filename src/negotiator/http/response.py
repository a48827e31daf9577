"""
=============================================================================
NEGOTIATED RESPONSE
=============================================================================

The output sink that response processors write into: a status code,
headers and a body buffer. The web framework copies it into its own
response object after negotiation.

=============================================================================
WHAT NEGOTIATION ADDS TO A RESPONSE
=============================================================================

    ┌───────────────────────────────────────────────────────────────┐
    │ HTTP/1.1 200 OK                                               │
    │ Content-Type: application/json      ← the processor's type    │
    │ Content-Language: en                ← the negotiated language │
    │ Vary: Accept, Accept-Language       ← caching hint            │
    │                                                               │
    │ {"name":"Joe Bloggs"}                                         │
    └───────────────────────────────────────────────────────────────┘

The Vary header tells caches that the body depends on the Accept and
Accept-Language request headers. Without it, a shared cache could hand a
JSON body to a browser that asked for HTML.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Union

from .status_codes import HTTPStatus


@dataclass
class HTTPResponse:
    """
    A mutable response being written by a processor.

    Processors call set_header() and write(); error handlers replace the
    status and body.
    """

    status: Union[HTTPStatus, int] = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def set_status(self, status: Union[HTTPStatus, int]) -> "HTTPResponse":
        try:
            self.status = HTTPStatus(status)
        except ValueError:
            self.status = int(status)  # a code this module has no phrase for
        return self

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """
        Set a response header.

        Returns self for method chaining:
            response.set_header("Content-Type", "text/csv").write("a,b\\n")
        """
        self.headers[name] = value
        return self

    def set_content_type(self, content_type: str) -> "HTTPResponse":
        """Set the Content-Type header."""
        return self.set_header("Content-Type", content_type)

    def add_vary(self, *names: str) -> "HTTPResponse":
        """Add header names to Vary, without duplicates."""
        current = [v.strip() for v in self.headers.get("Vary", "").split(",") if v.strip()]
        for name in names:
            if name not in current:
                current.append(name)
        if current:
            self.headers["Vary"] = ", ".join(current)
        return self

    def write(self, data: Union[str, bytes]) -> int:
        """
        Append to the body. Strings are encoded as UTF-8.

        Returns the number of bytes written, like a file object, so
        processors can hand the response to APIs expecting one.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.body += data
        return len(data)

    def reset(self) -> "HTTPResponse":
        """Discard anything written so far (used before error responses)."""
        self.status = HTTPStatus.OK
        self.headers.clear()
        self.body = b""
        return self


def http_error(response: HTTPResponse, message: str, status_code: int) -> None:
    """
    The default error handler: a plain-text error response.

    Anything already written is discarded. The message is sent as is,
    so keep it generic; never put exception details in it.
    """
    response.reset()
    response.set_status(status_code)
    response.set_header("Content-Type", "text/plain; charset=utf-8")
    response.set_header("X-Content-Type-Options", "nosniff")
    response.write(message + "\n")
