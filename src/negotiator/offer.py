"""
=============================================================================
OFFERS
=============================================================================

An Offer is one representation the server is able to send: a media type,
a language, an optional template name and the data to render.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          OFFER                                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   media_type   "text/html"      blank or "*/*" → any media type     │
    │   language     "en"             blank or "*"   → any language       │
    │   template     "user.html"      opaque, handed to the processor     │
    │   data         value | DataProvider | LanguageDataProvider          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
LAZY DATA
=============================================================================

Building the data can be expensive (a database query, a translation
lookup), and most offers are never chosen. So data may be a provider that
is only called once the offer has won:

    Offer("text/html", "en", data=DataProvider(load_user))
    Offer("text/html", "*", data=LanguageDataProvider(load_page))

A provider may return another provider; resolution repeats until a plain
value comes back, up to a fixed depth.

=============================================================================
INTERVIEW INSIGHT
=============================================================================

Q: "Why wrap the callables instead of checking callable(data)?"
A: "Plenty of ordinary values are callable (classes, bound methods,
   functools.partial). An explicit wrapper says 'call me later' and
   nothing else does, so no payload is ever invoked by accident."

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List

from .exceptions import DataProviderError


ANY_MEDIA_TYPE = "*/*"
ANY_LANGUAGE = "*"

# Provider chains longer than this are treated as a loop
DEFAULT_MAX_PROVIDER_DEPTH = 32


@dataclass(frozen=True)
class DataProvider:
    """Produces offer data on demand, with no arguments."""

    function: Callable[[], Any]

    def __call__(self) -> Any:
        return self.function()


@dataclass(frozen=True)
class LanguageDataProvider:
    """Produces offer data on demand, for the negotiated language."""

    function: Callable[[str], Any]

    def __call__(self, language: str) -> Any:
        return self.function(language)


def data_provider(function: Callable[[], Any]) -> DataProvider:
    """
    Decorator form of DataProvider.

    Example:
        @data_provider
        def report():
            return build_expensive_report()

        Offer("text/csv", data=report)
    """
    return DataProvider(function)


def language_data_provider(function: Callable[[str], Any]) -> LanguageDataProvider:
    """Decorator form of LanguageDataProvider."""
    return LanguageDataProvider(function)


def resolve_data(
    data: Any,
    language: str = "",
    max_depth: int = DEFAULT_MAX_PROVIDER_DEPTH,
) -> Any:
    """
    Call providers until a plain value is produced.

    Args:
        data: The offer's data, possibly a provider
        language: Passed to LanguageDataProvider calls
        max_depth: Maximum number of provider calls

    Raises:
        DataProviderError: If more than max_depth providers are chained.
    """
    for _ in range(max_depth):
        if isinstance(data, DataProvider):
            data = data()
        elif isinstance(data, LanguageDataProvider):
            data = data(language)
        else:
            return data

    if isinstance(data, (DataProvider, LanguageDataProvider)):
        raise DataProviderError(
            f"Data provider chain did not resolve after {max_depth} calls"
        )
    return data


def _normalize(value: str, wildcard: str) -> str:
    value = (value or "").strip()
    return value or wildcard


@dataclass(frozen=True)
class Offer:
    """
    A candidate response representation.

    Blank media types and languages are stored as wildcards, so
    Offer(data=x) offers x in any format and any language.
    """

    media_type: str = ANY_MEDIA_TYPE
    language: str = ANY_LANGUAGE
    template: str = ""
    data: Any = field(default=None, compare=False)

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "media_type", _normalize(self.media_type, ANY_MEDIA_TYPE))
        object.__setattr__(self, "language", _normalize(self.language, ANY_LANGUAGE))

    @property
    def any_media_type(self) -> bool:
        return self.media_type == ANY_MEDIA_TYPE

    @property
    def any_language(self) -> bool:
        return self.language == ANY_LANGUAGE

    def resolve(self, language: str = "", max_depth: int = DEFAULT_MAX_PROVIDER_DEPTH) -> Any:
        """Resolve this offer's data; see resolve_data()."""
        return resolve_data(self.data, language, max_depth)


def media_types(offers: Iterable[Offer]) -> List[str]:
    """The media types of some offers, in order (used in diagnostics)."""
    return [offer.media_type for offer in offers]
