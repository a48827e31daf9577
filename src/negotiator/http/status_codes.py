"""
=============================================================================
HTTP STATUS CODES FOR CONTENT NEGOTIATION
=============================================================================

The status codes a negotiated response can end with.

    ┌──────┬──────────────────────┬────────────────────────────────────────┐
    │ Code │ Phrase               │ When                                   │
    ├──────┼──────────────────────┼────────────────────────────────────────┤
    │ 200  │ OK                   │ A processor wrote the representation   │
    │ 204  │ No Content           │ The chosen data resolved to None       │
    │ 300  │ Multiple Choices     │ (reactive negotiation, not used here)  │
    │ 406  │ Not Acceptable       │ No offer satisfies the Accept headers  │
    │ 415  │ Unsupported Media..  │ (request bodies, not negotiated here)  │
    │ 500  │ Internal Server Err  │ The chosen processor failed            │
    │ 506  │ Variant Also Neg..   │ (transparent negotiation loop)         │
    └──────┴──────────────────────┴────────────────────────────────────────┘

=============================================================================
INTERVIEW INSIGHT
=============================================================================

Q: "Is a 406 an error in your server?"
A: "No. It is the expected answer when the client asks for something the
   resource does not come in, e.g. Accept: image/png on a JSON API. It
   gets logged at INFO, not ERROR. A 500 from a failing serializer is
   the real defect."

Q: "Must a server send 406?"
A: "RFC 7231 lets the server either send 406 or ignore the header and
   send a default. This library honours the header."

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes with reason phrases.

    Extends IntEnum, so codes compare equal to plain integers:

        >>> HTTPStatus.NOT_ACCEPTABLE == 406
        True
        >>> HTTPStatus.NOT_ACCEPTABLE.phrase
        'Not Acceptable'
    """

    OK = 200
    NO_CONTENT = 204
    MULTIPLE_CHOICES = 300
    BAD_REQUEST = 400
    NOT_FOUND = 404
    NOT_ACCEPTABLE = 406
    UNSUPPORTED_MEDIA_TYPE = 415
    INTERNAL_SERVER_ERROR = 500
    VARIANT_ALSO_NEGOTIATES = 506

    @property
    def phrase(self) -> str:
        """The reason phrase used in the status line."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self < 600

    @property
    def is_error(self) -> bool:
        """Check if this is an error status code (4xx or 5xx)."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NO_CONTENT: "No Content",
    HTTPStatus.MULTIPLE_CHOICES: "Multiple Choices",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.NOT_ACCEPTABLE: "Not Acceptable",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "Unsupported Media Type",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.VARIANT_ALSO_NEGOTIATES: "Variant Also Negotiates",
}
