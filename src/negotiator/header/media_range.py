"""
=============================================================================
MEDIA RANGES (THE ACCEPT HEADER)
=============================================================================

Splits Accept header members into type/subtype media ranges, assigns a
default quality by specificity and sorts them into precedence order.
Implements RFC 7231 §5.3.2.

=============================================================================
SPECIFICITY
=============================================================================

A media range can name a type exactly or use wildcards:

    ┌────────────────────────────────────────────────────────────────────┐
    │                  MEDIA RANGE SPECIFICITY                           │
    ├────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   Range               │ Class        │ Default q (tiered)           │
    │   ────────────────────┼──────────────┼──────────────────            │
    │   text/html;level=1   │ parametered  │ 1.0                          │
    │   text/html           │ type/subtype │ 0.9                          │
    │   text/*              │ type/*       │ 0.8                          │
    │   */*                 │ */*          │ 0.7                          │
    │                                                                     │
    │   An explicit q= always overrides the default.                      │
    │                                                                     │
    └────────────────────────────────────────────────────────────────────┘

The tiers mean that, with no q-values at all, the most specific range
wins. That is exactly the worked example in RFC 7231 §5.3.2:

    Accept: text/*, text/plain, text/plain;format=flowed, */*

    1) text/plain;format=flowed
    2) text/plain
    3) text/*
    4) */*

=============================================================================
PRECEDENCE ORDER
=============================================================================

    1. Higher quality first
    2. At equal quality, a concrete type beats a wildcard type, and a
       concrete subtype beats a wildcard subtype
    3. For the same type/subtype, more params first
       (text/html;level=1 before text/html)
    4. Otherwise, header order (the sort is stable)

=============================================================================
INTERVIEW INSIGHT
=============================================================================

Q: "Why not sort with a pairwise comparison function (cmp_to_key)?"
A: "Rule 3 only compares ranges with the same type/subtype, so as a
   pairwise comparator it is not transitive and a sort can leave
   text/html;level=1 behind text/html when another range sits between
   them. A sort key that groups identical type/subtype pairs gives a
   real total order with the same meaning."

=============================================================================
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from .precedence import KV, WILDCARD, RawPart, format_quality, split_header


class Specificity(IntEnum):
    """Specificity classes, most specific first (lower sorts first)."""

    PARAMETERED = 0    # text/html;level=1
    TYPE_SUBTYPE = 1   # text/html
    TYPE_STAR = 2      # text/*
    STAR_STAR = 3      # */*


@dataclass(frozen=True)
class MediaRangeWeights:
    """
    Default qualities for media ranges without an explicit q parameter.

    Use TIERED (the default) for specificity-based defaults, or FLAT
    where every range defaults to 1.0.
    """

    parametered: float = 1.0
    type_subtype: float = 0.9
    type_star: float = 0.8
    star_star: float = 0.7

    def default_for(self, specificity: Specificity) -> float:
        return {
            Specificity.PARAMETERED: self.parametered,
            Specificity.TYPE_SUBTYPE: self.type_subtype,
            Specificity.TYPE_STAR: self.type_star,
            Specificity.STAR_STAR: self.star_star,
        }[specificity]


TIERED = MediaRangeWeights()
FLAT = MediaRangeWeights(1.0, 1.0, 1.0, 1.0)

WEIGHTS: Dict[str, MediaRangeWeights] = {
    "tiered": TIERED,
    "flat": FLAT,
}


def split_media_type(value: str) -> Tuple[str, str]:
    """
    Split "type/subtype" on the first "/".

    The subtype is empty if there is no "/".
    """
    type_, _, subtype = value.partition("/")
    return type_.strip(), subtype.strip()


def classify(type_: str, subtype: str, params: Tuple[KV, ...] = ()) -> Specificity:
    # A "*" type with a concrete subtype is invalid; treat it as */*
    if type_ == WILDCARD:
        return Specificity.STAR_STAR
    if subtype == WILDCARD:
        return Specificity.TYPE_STAR
    if params:
        return Specificity.PARAMETERED
    return Specificity.TYPE_SUBTYPE


@dataclass(frozen=True)
class MediaRange:
    """
    A parsed Accept header member.

    Type and subtype are kept exactly as sent (case is preserved).
    """

    type: str
    subtype: str
    quality: float
    params: Tuple[KV, ...] = ()
    extensions: Tuple[KV, ...] = ()

    @property
    def value(self) -> str:
        """The bare "type/subtype", without params."""
        return f"{self.type}/{self.subtype}"

    @property
    def specificity(self) -> Specificity:
        return classify(self.type, self.subtype, self.params)

    @property
    def is_wildcard(self) -> bool:
        """True for "*/*" and "type/*"."""
        return self.type == WILDCARD or self.subtype == WILDCARD

    @property
    def is_blank(self) -> bool:
        return not self.type and not self.subtype

    def matches(self, media_type: str) -> bool:
        """
        Check whether this range covers a media type.

        Either side may use wildcards:

            text/*  covers  text/html
            */*     covers  anything
            text/html covers "*/*" and "text/*" offers too
        """
        type_, subtype = split_media_type(media_type)

        if self.type == WILDCARD or type_ == WILDCARD:
            return True
        if self.type != type_:
            return False
        return self.subtype == WILDCARD or subtype == WILDCARD or self.subtype == subtype

    def to_string(self, weights: MediaRangeWeights = TIERED) -> str:
        """
        Canonical header form, e.g. "text/html;level=1;q=0.5;ext=x".

        q is only written when it differs from the default the given
        weights would assign, or when extensions follow it, so the text
        parses back to an equivalent range.
        """
        parts = [self.value]
        parts.extend(str(p) for p in self.params)
        if self.quality != weights.default_for(self.specificity) or self.extensions:
            parts.append(f"q={format_quality(self.quality)}")
        parts.extend(str(p) for p in self.extensions)
        return ";".join(parts)

    def __str__(self) -> str:
        return self.to_string()


# The implied range when there is no Accept header
DEFAULT_MEDIA_RANGE = MediaRange(WILDCARD, WILDCARD, 1.0)


def _to_media_range(part: RawPart, weights: MediaRangeWeights) -> MediaRange:
    type_, subtype = split_media_type(part.value)
    quality = part.quality
    if quality is None:
        quality = weights.default_for(classify(type_, subtype, part.params))
    return MediaRange(type_, subtype, quality, part.params, part.extensions)


def rank_media_ranges(ranges: List[MediaRange]) -> List[MediaRange]:
    """
    Sort media ranges into precedence order, most preferred first.

    =====================================================================
    SORT KEY
    =====================================================================

        (-quality, wildcard class, first position of type/subtype, -params)

    The wildcard class only separates concrete, type/* and */* ranges;
    parametered and plain ranges share a class so that rule 3 (more
    params first) decides between them. Grouping by the first position
    of each type/subtype pair keeps header order between unrelated
    ranges while still putting text/html;level=1 next to, and ahead
    of, text/html.

    First positions are counted within one (quality, wildcard class)
    group only, so ranking an already ranked list changes nothing:

        text/plain, text/html;level=1, text/html
        → text/html;level=1, text/plain, text/html

    =====================================================================
    """
    def group(mr: MediaRange) -> Tuple[float, Specificity, str, str]:
        wildcard_class = max(mr.specificity, Specificity.TYPE_SUBTYPE)
        return (mr.quality, wildcard_class, mr.type, mr.subtype)

    first_seen: Dict[Tuple[float, Specificity, str, str], int] = {}
    for index, mr in enumerate(ranges):
        first_seen.setdefault(group(mr), index)

    def key(mr: MediaRange):
        quality, wildcard_class, _, _ = group(mr)
        return (
            -quality,
            wildcard_class,
            first_seen[group(mr)],
            -len(mr.params),
        )

    return sorted(ranges, key=key)


def parse_media_ranges(
    header: Optional[str],
    weights: MediaRangeWeights = TIERED,
) -> List[MediaRange]:
    """Parse an Accept header into media ranges, in header order."""
    return [_to_media_range(part, weights) for part in split_header(header)]


def parse_accept(
    header: Optional[str],
    weights: MediaRangeWeights = TIERED,
) -> List[MediaRange]:
    """
    Parse an Accept header into media ranges, most preferred first.

    A blank or missing header gives an empty list.

    Examples:
        >>> [str(mr) for mr in parse_accept("text/*, text/html, */*")]
        ['text/html', 'text/*', '*/*']

        >>> [str(mr) for mr in parse_accept("text/html;q=0.5, application/xml")]
        ['application/xml', 'text/html;q=0.5']
    """
    return rank_media_ranges(parse_media_ranges(header, weights))


def accept_or_default(
    header: Optional[str],
    weights: MediaRangeWeights = TIERED,
) -> List[MediaRange]:
    """
    Like parse_accept(), but a missing header means "*/*".

    Per RFC 7231, a request without any Accept header field implies that
    the user agent will accept any media type in response.
    """
    ranges = [mr for mr in parse_accept(header, weights) if not mr.is_blank]
    return ranges or [DEFAULT_MEDIA_RANGE]


def unparse_accept(ranges: List[MediaRange], weights: MediaRangeWeights = TIERED) -> str:
    """Serialize media ranges back to an Accept header value."""
    return ", ".join(mr.to_string(weights) for mr in ranges)
