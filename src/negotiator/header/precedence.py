"""
=============================================================================
PRECEDENCE VALUE PARSER
=============================================================================

Parses the weighted lists carried by the Accept-* request headers into
structured PrecedenceValue objects, and ranks them by client preference.
Implements the list syntax of RFC 7231 §5.3.

=============================================================================
ANATOMY OF A WEIGHTED HEADER
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                  Accept-Language: en-GB;q=0.8, fr                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │     en-GB ; q=0.8 ; x=1   ,   fr                                    │
    │     ──┬──   ──┬──   ─┬─       ─┬                                    │
    │       │       │      │         │                                    │
    │     value  quality  extension  value (quality defaults to 1.0)     │
    │                                                                      │
    │   Parameters BEFORE q=  → params      (part of the value identity) │
    │   Parameters AFTER  q=  → extensions  (accept-ext, kept verbatim)  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
QUALITY VALUES ("q-values")
=============================================================================

    q=1     → most preferred (the default)
    q=0.5   → acceptable, less preferred
    q=0     → NOT acceptable (explicit exclusion)

A malformed q-value (e.g. "q=blah" or "q=7") never aborts parsing; the
entry is kept and the q-value is treated as if it were absent.

=============================================================================
INTERVIEW INSIGHT
=============================================================================

Q: "Why not just split on ',' and ';' and call float()?"
A: "Headers come from untrusted clients. A single bad token must not turn
   a request into a 500. We degrade: bad qualities fall back to the
   default and empty list members are skipped."

Q: "Why keep params and extensions separate?"
A: "Params before q are part of what the client asks for
   (text/html;level=1 is a different thing from text/html). Extensions
   after q only annotate the preference, so they take no part in ranking."

=============================================================================
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


# Default quality of a value with no explicit "q" parameter
# https://tools.ietf.org/html/rfc7231#section-5.3.1
DEFAULT_QUALITY = 1.0

# The wildcard value meaning "anything"
WILDCARD = "*"


@dataclass(frozen=True)
class KV:
    """A header parameter: key and (possibly empty) value."""

    key: str
    value: str = ""

    def __str__(self) -> str:
        if self.value:
            return f"{self.key}={self.value}"
        return self.key


@dataclass(frozen=True)
class PrecedenceValue:
    """
    A single member of a weighted header list.

    Attributes:
        value:      The bare token, e.g. "en-GB" or "utf-8"
        quality:    Preference weight between 0.0 and 1.0
        params:     Parameters that appeared before q=, in header order
        extensions: Parameters that appeared after q=, in header order
    """

    value: str
    quality: float = DEFAULT_QUALITY
    params: Tuple[KV, ...] = ()
    extensions: Tuple[KV, ...] = ()

    @property
    def is_wildcard(self) -> bool:
        return self.value == WILDCARD

    def __str__(self) -> str:
        parts = [self.value]
        parts.extend(str(p) for p in self.params)
        if self.quality != DEFAULT_QUALITY or self.extensions:
            parts.append(f"q={format_quality(self.quality)}")
        parts.extend(str(p) for p in self.extensions)
        return ";".join(parts)


# The implied preference when a header is absent: accept anything
DEFAULT_PRECEDENCE_VALUE = PrecedenceValue(WILDCARD, DEFAULT_QUALITY)


# =============================================================================
# LOW-LEVEL PARSING
# =============================================================================

@dataclass(frozen=True)
class RawPart:
    """
    One comma-separated member of a header, before any defaults are applied.

    quality is None when no valid q parameter was present; the caller
    decides what the default is (media ranges use specificity tiers).
    """

    value: str
    quality: Optional[float]
    params: Tuple[KV, ...]
    extensions: Tuple[KV, ...]


def parse_quality(text: str) -> Optional[float]:
    """
    Parse a q-value, returning None if it is not a number in [0, 1].

    Examples:
        >>> parse_quality("0.5")
        0.5
        >>> parse_quality("blah") is None
        True
    """
    try:
        quality = float(text.strip())
    except ValueError:
        return None

    if math.isnan(quality) or not 0.0 <= quality <= 1.0:
        return None

    return quality


def format_quality(quality: float) -> str:
    """Format a q-value the shortest way: 1.0 → "1", 0.50 → "0.5"."""
    return format(quality, "g")


def _split_kv(text: str) -> KV:
    key, _, value = text.partition("=")
    return KV(key.strip(), value.strip())


def split_header(header: Optional[str]) -> Iterator[RawPart]:
    """
    Split a raw header into RawPart tuples, in header order.

    =====================================================================
    ALGORITHM
    =====================================================================

    1. Split on "," and trim each member (empty members are skipped)
    2. Split each member on ";" into the value and its parameters
    3. Split each parameter on the first "="
    4. A case-insensitive "q" key sets the quality; parameters before
       it are params, parameters after it are extensions

    =====================================================================
    """
    if not header:
        return

    for member in header.split(","):
        member = member.strip()
        if not member:
            continue

        value, *raw_params = member.split(";")

        quality: Optional[float] = None
        seen_quality = False
        params: List[KV] = []
        extensions: List[KV] = []

        for raw in raw_params:
            raw = raw.strip()
            if not raw:
                continue

            kv = _split_kv(raw)
            if not seen_quality and kv.key.lower() == "q":
                seen_quality = True
                quality = parse_quality(kv.value)
                continue

            if seen_quality:
                extensions.append(kv)
            else:
                params.append(kv)

        yield RawPart(value.strip(), quality, tuple(params), tuple(extensions))


def parse_precedence_values(header: Optional[str]) -> List[PrecedenceValue]:
    """
    Parse a weighted header list, without sorting it.

    Values without a (valid) q parameter get DEFAULT_QUALITY.
    A blank or missing header gives an empty list, never an error.
    """
    return [
        PrecedenceValue(
            value=part.value,
            quality=DEFAULT_QUALITY if part.quality is None else part.quality,
            params=part.params,
            extensions=part.extensions,
        )
        for part in split_header(header)
    ]


# =============================================================================
# RANKING
# =============================================================================

def rank_precedence_values(values: List[PrecedenceValue]) -> List[PrecedenceValue]:
    """
    Sort values most-preferred first.

    Quality descending, then number of params descending. The sort is
    stable, so fully-equal entries keep the order the client sent them in.
    """
    return sorted(values, key=lambda v: (-v.quality, -len(v.params)))


def _parse_and_rank(header: Optional[str]) -> List[PrecedenceValue]:
    values = parse_precedence_values(header)
    if not values:
        # No header at all implies the client accepts anything
        return [DEFAULT_PRECEDENCE_VALUE]
    return rank_precedence_values(values)


def parse_accept_language(header: Optional[str]) -> List[PrecedenceValue]:
    """
    Parse and rank an Accept-Language header.

    Example:
        >>> [str(v) for v in parse_accept_language("fr;q=0.5, en-GB")]
        ['en-GB', 'fr;q=0.5']
    """
    return _parse_and_rank(header)


def parse_accept_charset(header: Optional[str]) -> List[PrecedenceValue]:
    """Parse and rank an Accept-Charset header."""
    return _parse_and_rank(header)


def parse_accept_encoding(header: Optional[str]) -> List[PrecedenceValue]:
    """
    Parse and rank an Accept-Encoding header.

    Ranked only; choosing a content coding is left to the transport.
    """
    return _parse_and_rank(header)


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# 1. split_header() turns raw text into RawPart tuples (no defaults)
# 2. parse_precedence_values() applies the 1.0 default quality
# 3. rank_precedence_values() sorts by quality, then param count
# 4. parse_accept_language/charset/encoding() add the "*" default
#    when the header is missing
#
# Media ranges (Accept) reuse split_header() but have their own
# defaults and ordering: see media_range.py.
# =============================================================================
