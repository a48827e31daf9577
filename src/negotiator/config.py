"""
=============================================================================
NEGOTIATOR CONFIGURATION
=============================================================================

All tunable behaviour of the negotiator in one frozen dataclass. Like the
rest of the negotiator it is immutable: build one at startup and share it.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌────────────────────────────┐
    │ 1. Defaults                │  NegotiatorConfig()
    ├────────────────────────────┤
    │ 2. Environment variables   │  NegotiatorConfig.from_env()
    ├────────────────────────────┤
    │ 3. Explicit arguments      │  NegotiatorConfig(weights="flat")
    └────────────────────────────┘

=============================================================================
INTERVIEW INSIGHT
=============================================================================

Q: "Why make the config immutable?"

A: "One negotiator serves every request thread. If the config could
   change under it, two threads could see two different policies in
   the middle of the same negotiation. A frozen dataclass plus
   dataclasses.replace() gives cheap, thread-safe 'modified copies'."

Q: "How do you validate configuration?"

A: "Validate eagerly at startup, not lazily at first use. Fail fast
   with clear error messages."

=============================================================================
"""

import os
from dataclasses import dataclass

from .header import WEIGHTS, MediaRangeWeights
from .offer import DEFAULT_MAX_PROVIDER_DEPTH


NOT_ACCEPTABLE_MESSAGE = "the accepted formats are not offered by the server"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class NegotiatorConfig:
    """
    Configuration for a Negotiator.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    MATCHING
    - weights, strict_language_exclusion, ajax

    DATA
    - max_provider_depth

    RESPONSES
    - not_acceptable_message

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # MATCHING
    # ─────────────────────────────────────────────────────────────────────

    weights: str = "tiered"
    """
    Default qualities for media ranges without q.
    - "tiered" - 1.0 / 0.9 / 0.8 / 0.7 by specificity (RFC 7231 examples)
    - "flat"   - 1.0 for everything
    """

    strict_language_exclusion: bool = False
    """
    What Accept-Language q=0 means.
    False - refused languages are ignored; a response in that language
            may still be sent when nothing else fits
    True  - a refused language matching an offer ends in 406
    """

    ajax: bool = True
    """Answer X-Requested-With: XMLHttpRequest requests with JSON."""

    # ─────────────────────────────────────────────────────────────────────
    # DATA
    # ─────────────────────────────────────────────────────────────────────

    max_provider_depth: int = DEFAULT_MAX_PROVIDER_DEPTH
    """Longest chain of data providers before giving up with a 500."""

    # ─────────────────────────────────────────────────────────────────────
    # RESPONSES
    # ─────────────────────────────────────────────────────────────────────

    not_acceptable_message: str = NOT_ACCEPTABLE_MESSAGE
    """Body of 406 responses."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """Log format: 'json' or 'text'."""

    @property
    def media_range_weights(self) -> MediaRangeWeights:
        """The MediaRangeWeights named by weights."""
        return WEIGHTS[self.weights]

    @classmethod
    def from_env(cls) -> "NegotiatorConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        NEGOTIATOR_WEIGHTS             tiered | flat (default: tiered)
        NEGOTIATOR_STRICT_LANGUAGE     1/true/yes/on (default: off)
        NEGOTIATOR_AJAX                1/true/yes/on (default: on)
        NEGOTIATOR_MAX_PROVIDER_DEPTH  (default: 32)
        NEGOTIATOR_LOG_LEVEL           (default: INFO)
        NEGOTIATOR_LOG_FORMAT          text | json (default: text)

        =====================================================================
        """
        return cls(
            weights=os.getenv("NEGOTIATOR_WEIGHTS", "tiered").lower(),
            strict_language_exclusion=_env_bool("NEGOTIATOR_STRICT_LANGUAGE", False),
            ajax=_env_bool("NEGOTIATOR_AJAX", True),
            max_provider_depth=int(
                os.getenv("NEGOTIATOR_MAX_PROVIDER_DEPTH", str(DEFAULT_MAX_PROVIDER_DEPTH))
            ),
            log_level=os.getenv("NEGOTIATOR_LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("NEGOTIATOR_LOG_FORMAT", "text").lower(),
        )

    def validate(self) -> None:
        """Validate configuration values, raising ValueError."""
        if self.weights not in WEIGHTS:
            raise ValueError(
                f"Invalid weights: {self.weights!r}. Must be one of {sorted(WEIGHTS)}."
            )

        if self.max_provider_depth < 1:
            raise ValueError("max_provider_depth must be >= 1")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level!r}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format!r}. Must be 'text' or 'json'.")


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# 1. Frozen dataclass, shared freely between threads
# 2. Environment variable support via from_env()
# 3. Validation at startup (fail-fast)
# =============================================================================
