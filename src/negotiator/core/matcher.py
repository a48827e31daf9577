"""
=============================================================================
OFFER MATCHER
=============================================================================

Pairs the client's ranked preferences with the server's offers and picks
one (offer, processor) pair, or nothing (406 Not Acceptable).

=============================================================================
THE SEARCH
=============================================================================

    Accept:          text/test, text/*          (ranked)
    Accept-Language: en-GB, fr-FR               (ranked)
    Offers:          d1 text/html en, d2 text/test de, d3 text/test en

    ┌──────────────────────────────────────────────────────────────────────┐
    │ 1. EXCLUSION  drop offers whose type/subtype equals a q=0 range      │
    │                                                                      │
    │ 2. EXACT      for range in ranges:          text/test  text/*        │
    │                 for language in languages:  en-GB  fr-FR             │
    │                   for offer in offers:      d1  d2  d3               │
    │                     concrete type == concrete type                   │
    │                     and language match ("*" only equals "*")         │
    │                                                                      │
    │               text/test × en-GB × d3  ✓  (en-GB ~ en)                │
    │                                                                      │
    │ 3. WILDCARD   the same loops, now letting "*" match on either side   │
    │               a more specific q=0 range covering the match: 406      │
    │                                                                      │
    │ 4. PROCESSOR  first processor that can_process() the result          │
    └──────────────────────────────────────────────────────────────────────┘

The client's preferences are the outer loops, so a more preferred media
range always wins over the caller's offer order; offer order only breaks
ties.

=============================================================================
LANGUAGE TAGS
=============================================================================

Language tags match case-insensitively, and a tag matches its own
subtags in either direction:

    en    ~ en-GB      (the client takes any English, we have British)
    en-GB ~ en         (the client wants British, we have generic English)
    en    ≁ eng        (a prefix must end at a "-")

=============================================================================
INTERVIEW INSIGHT
=============================================================================

Q: "Why is a matching q=0 range a hard 406 instead of a skip?"

A: "q=0 means 'not acceptable'. If the best thing we can send is something
   the client explicitly refused, a 406 is the honest answer; carrying on
   would only find something the client likes even less."

=============================================================================
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..header import (
    DEFAULT_PRECEDENCE_VALUE,
    MediaRange,
    PrecedenceValue,
)
from ..header.media_range import WILDCARD, classify, split_media_type
from ..offer import ANY_LANGUAGE, ANY_MEDIA_TYPE, Offer
from ..processor import ResponseProcessor


# Offer media types that an Ajax responder may answer
AJAX_MEDIA_TYPES = ("*/*", "application/*", "application/json")

# Values of Match.via
AJAX = "ajax"
EXACT = "exact"
WILDCARD_PASS = "wildcard"


@dataclass(frozen=True)
class Match:
    """
    The outcome of a successful negotiation.

    Attributes:
        processor:  The processor that will write the response
        offer:      The chosen offer
        media_type: The effective media type
        language:   The effective language, "" when none was negotiated
        via:        Which step found the match: "ajax", "exact" or "wildcard"
    """

    processor: ResponseProcessor
    offer: Offer
    media_type: str
    language: str = ""
    via: str = EXACT


# =============================================================================
# LANGUAGE MATCHING
# =============================================================================

def language_tags_match(accepted: str, offered: str) -> bool:
    """
    Compare two concrete language tags.

    Examples:
        >>> language_tags_match("en-GB", "en")
        True
        >>> language_tags_match("EN", "en")
        True
        >>> language_tags_match("en", "eng")
        False
    """
    accepted = accepted.lower()
    offered = offered.lower()
    return (
        accepted == offered
        or accepted.startswith(offered + "-")
        or offered.startswith(accepted + "-")
    )


def language_matches(accepted: str, offered: str, allow_wildcards: bool) -> bool:
    """
    Compare an accepted and an offered language.

    Without allow_wildcards "*" is an ordinary tag: it only equals "*".
    """
    if allow_wildcards and (accepted == ANY_LANGUAGE or offered == ANY_LANGUAGE):
        return True
    return language_tags_match(accepted, offered)


def media_type_matches(media_range: MediaRange, offered: str, allow_wildcards: bool) -> bool:
    if not allow_wildcards:
        return not media_range.is_wildcard and WILDCARD not in offered and media_range.value == offered
    return media_range.matches(offered)


# =============================================================================
# EFFECTIVE MEDIA TYPE AND LANGUAGE
# =============================================================================

def _is_concrete(media_type: str) -> bool:
    return WILDCARD not in split_media_type(media_type)


def effective_media_type(media_range: MediaRange, offered: str) -> str:
    """
    The media type a response will actually have.

    The offer's type wins if it is concrete, then the accepted range's;
    with wildcards on both sides the more specific one is used
    (text/* over */*).
    """
    if _is_concrete(offered):
        return offered
    if not media_range.is_wildcard:
        return media_range.value

    offered_specificity = classify(*split_media_type(offered))
    if offered_specificity <= media_range.specificity:
        return offered
    return media_range.value


def effective_language(accepted: str, offered: str) -> str:
    if offered and offered != ANY_LANGUAGE:
        return offered
    if accepted and accepted != ANY_LANGUAGE:
        return accepted
    return ""


def select_processor(
    processors: Sequence[ResponseProcessor],
    media_type: str,
    language: str,
) -> Optional[ResponseProcessor]:
    """
    Pick the processor for a matched pair.

    "*/*" means the client takes anything, so the first processor is used
    without asking it.
    """
    if not processors:
        return None
    if media_type == ANY_MEDIA_TYPE:
        return processors[0]
    for processor in processors:
        if processor.can_process(media_type, language):
            return processor
    return None


# =============================================================================
# THE SEARCH
# =============================================================================

def exclude_offers(media_ranges: Iterable[MediaRange], offers: Iterable[Offer]) -> List[Offer]:
    """Remove offers whose type/subtype exactly equals a q=0 media range."""
    excluded = {mr.value for mr in media_ranges if mr.quality == 0}
    return [offer for offer in offers if offer.media_type not in excluded]


def usable_languages(
    languages: Sequence[PrecedenceValue],
    strict_language: bool,
) -> List[PrecedenceValue]:
    """
    The languages to match against.

    Without strict_language, refused (q=0) languages are dropped, and an
    empty result means "any language".
    """
    if strict_language:
        usable = list(languages)
    else:
        usable = [lang for lang in languages if lang.quality > 0]
    return usable or [DEFAULT_PRECEDENCE_VALUE]


def refused_by_more_specific(
    media_ranges: Sequence[MediaRange],
    media_range: MediaRange,
    media_type: str,
) -> bool:
    """
    Test whether a more specific q=0 range covers media_type.

    The most specific matching range decides the quality (RFC 7231
    §5.3.2), so with "text/*;q=0, */*" a text/html offer matched by
    */* is still refused.
    """
    type_, subtype = split_media_type(media_type)
    for mr in media_ranges:
        if mr.quality != 0 or mr.specificity >= media_range.specificity:
            continue
        if mr.type in (WILDCARD, type_) and mr.subtype in (WILDCARD, subtype):
            return True
    return False


def _search(
    media_ranges: Sequence[MediaRange],
    languages: Sequence[PrecedenceValue],
    offers: Sequence[Offer],
    processors: Sequence[ResponseProcessor],
    allow_wildcards: bool,
) -> Tuple[bool, Optional[Match]]:
    """
    One pass over ranges × languages × offers.

    Returns (done, match). done is True when the pass reached a decision:
    a match, or a refused (q=0) pair, which ends negotiation with no match.
    """
    via = WILDCARD_PASS if allow_wildcards else EXACT

    for media_range in media_ranges:
        for language in languages:
            for offer in offers:
                if not media_type_matches(media_range, offer.media_type, allow_wildcards):
                    continue
                if not language_matches(language.value, offer.language, allow_wildcards):
                    continue

                if media_range.quality == 0 or language.quality == 0:
                    return True, None

                media_type = effective_media_type(media_range, offer.media_type)
                if refused_by_more_specific(media_ranges, media_range, media_type):
                    return True, None

                lang = effective_language(language.value, offer.language)
                processor = select_processor(processors, media_type, lang)
                if processor is not None:
                    return True, Match(processor, offer, media_type, lang, via)

    return False, None


def best_match(
    media_ranges: Sequence[MediaRange],
    languages: Sequence[PrecedenceValue],
    offers: Sequence[Offer],
    processors: Sequence[ResponseProcessor],
    strict_language: bool = False,
) -> Optional[Match]:
    """
    Find the best (offer, processor) pair for ranked client preferences.

    Args:
        media_ranges: Ranked Accept media ranges (use accept_or_default())
        languages: Ranked Accept-Language values
        offers: The server's offers, in the caller's order
        processors: Registered processors, in order
        strict_language: Treat a matching q=0 language as a refusal

    Returns:
        The Match, or None when nothing is acceptable.
    """
    if not processors:
        return None

    offers = exclude_offers(media_ranges, offers)
    if not offers:
        return None

    languages = usable_languages(languages, strict_language)

    for allow_wildcards in (False, True):
        done, match = _search(media_ranges, languages, offers, processors, allow_wildcards)
        if done:
            return match

    return None


def ajax_match(
    offers: Sequence[Offer],
    processors: Sequence[ResponseProcessor],
) -> Optional[Match]:
    """
    Answer an Ajax request without ranking.

    The first offer that can be JSON goes to the first Ajax responder.
    None if either is missing; normal negotiation then takes over.
    """
    offer = next((o for o in offers if o.media_type in AJAX_MEDIA_TYPES), None)
    processor = next((p for p in processors if p.ajax_responder), None)
    if offer is None or processor is None:
        return None

    return Match(
        processor=processor,
        offer=offer,
        media_type=processor.content_type,
        language=effective_language("", offer.language),
        via=AJAX,
    )
