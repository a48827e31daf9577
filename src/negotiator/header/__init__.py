"""
=============================================================================
HEADER PARSING PACKAGE
=============================================================================

Parsers and rankers for the weighted Accept-* request headers.

    precedence.py   Generic weighted lists (Accept-Language, Accept-Charset,
                    Accept-Encoding) and the shared low-level splitter
    media_range.py  The Accept header: type/subtype media ranges with
                    specificity-based default qualities

=============================================================================
"""

from .precedence import (
    DEFAULT_PRECEDENCE_VALUE,
    DEFAULT_QUALITY,
    KV,
    PrecedenceValue,
    parse_accept_charset,
    parse_accept_encoding,
    parse_accept_language,
    parse_precedence_values,
    rank_precedence_values,
)
from .media_range import (
    DEFAULT_MEDIA_RANGE,
    FLAT,
    TIERED,
    WEIGHTS,
    MediaRange,
    MediaRangeWeights,
    Specificity,
    accept_or_default,
    parse_accept,
    parse_media_ranges,
    rank_media_ranges,
    unparse_accept,
)

__all__ = [
    # Generic lists
    "KV",
    "PrecedenceValue",
    "DEFAULT_QUALITY",
    "DEFAULT_PRECEDENCE_VALUE",
    "parse_precedence_values",
    "rank_precedence_values",
    "parse_accept_language",
    "parse_accept_charset",
    "parse_accept_encoding",

    # Media ranges
    "MediaRange",
    "MediaRangeWeights",
    "Specificity",
    "TIERED",
    "FLAT",
    "WEIGHTS",
    "DEFAULT_MEDIA_RANGE",
    "parse_media_ranges",
    "rank_media_ranges",
    "parse_accept",
    "accept_or_default",
    "unparse_accept",
]
