"""
Core negotiation engine.

    matcher.py   best_match() and ajax_match(): offers × client preferences
"""

from .matcher import (
    AJAX_MEDIA_TYPES,
    Match,
    ajax_match,
    best_match,
    effective_language,
    effective_media_type,
    exclude_offers,
    language_tags_match,
    select_processor,
)

__all__ = [
    "AJAX_MEDIA_TYPES",
    "Match",
    "best_match",
    "ajax_match",
    "effective_media_type",
    "effective_language",
    "exclude_offers",
    "language_tags_match",
    "select_processor",
]
