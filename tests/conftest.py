"""
pytest configuration and fixtures.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from negotiator import HTTPRequest, HTTPResponse, Negotiator
from negotiator.processor import ResponseProcessor


@dataclass(frozen=True)
class FakeProcessor(ResponseProcessor):
    """
    Processor for a single media type, in no language or English.

    Writes "<match> | <data>" and records every call.
    """

    match: str = "text/test"
    content_type: str = "text/test"
    calls: List[Any] = field(default_factory=list, compare=False)

    def can_process(self, media_range: str, language: str) -> bool:
        return media_range == self.match and language in ("", "en")

    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        self.calls.append(data)
        response.write(f"{self.match} | {data}")


@dataclass(frozen=True)
class FailingProcessor(ResponseProcessor):
    """Processor that accepts everything and always fails."""

    content_type: str = "text/test"

    def can_process(self, media_range: str, language: str) -> bool:
        return True

    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        response.write("partial output")
        raise RuntimeError("encoder exploded")


class RecordingPrinter:
    """Diagnostics printer that keeps every event."""

    def __init__(self):
        self.events: List[Tuple[int, str, Dict[str, Any]]] = []

    def __call__(self, level: int, message: str, context: Dict[str, Any]) -> None:
        self.events.append((level, message, dict(context)))

    @property
    def messages(self) -> List[str]:
        return [message for _, message, _ in self.events]


@pytest.fixture
def fake_processor() -> FakeProcessor:
    """A processor for text/test."""
    return FakeProcessor()


@pytest.fixture
def printer() -> RecordingPrinter:
    """A printer recording negotiation diagnostics."""
    return RecordingPrinter()


@pytest.fixture
def negotiator(fake_processor: FakeProcessor, printer: RecordingPrinter) -> Negotiator:
    """A negotiator with only the fake text/test processor."""
    return Negotiator.of(fake_processor).with_logger(printer)


@pytest.fixture
def make_request() -> Callable[..., HTTPRequest]:
    """Factory for requests: make_request(accept=..., accept_language=..., ajax=...)."""
    def factory(accept=None, accept_language=None, ajax=False, **headers) -> HTTPRequest:
        pairs = {}
        if accept is not None:
            pairs["Accept"] = accept
        if accept_language is not None:
            pairs["Accept-Language"] = accept_language
        if ajax:
            pairs["X-Requested-With"] = "XMLHttpRequest"
        pairs.update(headers)
        return HTTPRequest.from_headers(pairs)

    return factory


@pytest.fixture
def response() -> HTTPResponse:
    """An empty response."""
    return HTTPResponse()


@dataclass
class ValidXMLUser:
    Name: str


@pytest.fixture
def user() -> ValidXMLUser:
    """A one-field record that serializes the same way in JSON and XML."""
    return ValidXMLUser("Joe Bloggs")
