"""
=============================================================================
NEGOTIATION DIAGNOSTICS
=============================================================================

The negotiator explains its decisions through a "printer": a plain
callable it receives at construction time.

    printer(level, message, context)

        level    logging level number (logging.DEBUG, logging.INFO, ...)
        message  what happened, e.g. "matched"
        context  dict of details: headers, offers, processor...

Injecting the printer keeps the negotiator free of global state; the
default printer forwards to the standard logging module.

=============================================================================
LOG FORMATS
=============================================================================

    TEXT (default):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ matched via=exact accept='text/test, text/*' media_type=text/test  │
    └─────────────────────────────────────────────────────────────────────┘

    JSON (for log aggregators):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ {"message": "matched", "via": "exact", "accept": "text/test, ...", │
    │  "media_type": "text/test"}                                        │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
EVENTS
=============================================================================

    DEBUG   every decision: which step matched, what was chosen
    INFO    406 Not Acceptable
    ERROR   a processor failed while writing the response

=============================================================================
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════
# A namespaced logger, so applications can tune it on its own:
#   logging.getLogger("negotiator").setLevel(logging.DEBUG)
# ═══════════════════════════════════════════════════════════════════════════

logger = logging.getLogger("negotiator")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

Printer = Callable[[int, str, Dict[str, Any]], None]


@dataclass
class NegotiationLog:
    """
    Structured log entry for one negotiation event.

    message: What happened ("matched", "not acceptable", ...)
    context: Details; values are rendered with repr() in text form
    """

    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to a dictionary for JSON serialization."""
        entry = {"message": self.message}
        entry.update(self.context)
        return entry

    def to_text(self) -> str:
        """Format as "message key=value key=value"."""
        parts = [self.message]
        for key, value in self.context.items():
            text = value if isinstance(value, (int, float)) else repr(value)
            parts.append(f"{key}={text}")
        return " ".join(str(p) for p in parts)


def logging_printer(logger: Optional[logging.Logger] = None, log_format: str = "text") -> Printer:
    """
    Build a printer that writes to a standard library logger.

    Args:
        logger: Target logger (default: the "negotiator" logger)
        log_format: "text" or "json"
    """
    target = logger or logging.getLogger("negotiator")

    def printer(level: int, message: str, context: Dict[str, Any]) -> None:
        if not target.isEnabledFor(level):
            return
        entry = NegotiationLog(message, dict(context))
        if log_format == "json":
            target.log(level, json.dumps(entry.to_dict(), default=str))
        else:
            target.log(level, entry.to_text())

    return printer


def silent_printer(level: int, message: str, context: Dict[str, Any]) -> None:
    """A printer that discards everything."""


def configure_logging(level: str = "INFO", log_format: str = "text") -> None:
    """
    Send the "negotiator" logger to stderr (used by the CLI).

    With log_format="json" the records already are JSON, so only the
    message is written.
    """
    handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.handlers[:] = [handler]
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# 1. Printer: an injected callable, no global mutable logger
# 2. Structured entries with text and JSON renderings
# 3. configure_logging() for command-line use
# =============================================================================
