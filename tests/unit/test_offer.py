"""
Unit tests for offers and lazy data providers.
"""

import pytest

from negotiator import (
    DataProvider,
    DataProviderError,
    LanguageDataProvider,
    Offer,
    data_provider,
    language_data_provider,
)
from negotiator.offer import media_types, resolve_data


class TestOffer:
    """Tests for the Offer dataclass."""

    def test_defaults_are_wildcards(self):
        """Test that an offer without type or language offers anything."""
        offer = Offer(data="x")

        assert offer.media_type == "*/*"
        assert offer.language == "*"
        assert offer.any_media_type
        assert offer.any_language

    def test_blank_values_normalized(self):
        """Test that blank strings become wildcards."""
        offer = Offer(media_type="  ", language="")

        assert offer.media_type == "*/*"
        assert offer.language == "*"

    def test_concrete_values_kept(self):
        """Test that concrete type and language are stored as given."""
        offer = Offer("text/csv", "en-GB", "report", [1, 2])

        assert offer.media_type == "text/csv"
        assert offer.language == "en-GB"
        assert offer.template == "report"
        assert not offer.any_media_type
        assert not offer.any_language

    def test_immutable(self):
        """Test that offers cannot be modified."""
        offer = Offer("text/csv")

        with pytest.raises(AttributeError):
            offer.media_type = "text/html"

    def test_media_types(self):
        """Test the diagnostics helper."""
        offers = [Offer("text/csv"), Offer(data=1)]

        assert media_types(offers) == ["text/csv", "*/*"]


class TestDataProviders:
    """Tests for lazy data resolution."""

    def test_plain_data_returned_as_is(self):
        """Test that non-provider data is not touched."""
        data = {"a": 1}

        assert resolve_data(data) is data

    def test_plain_callables_are_data(self):
        """Test that an ordinary function is data, not a provider."""
        assert resolve_data(len) is len

    def test_data_provider_called(self):
        """Test that a DataProvider is called."""
        offer = Offer(data=DataProvider(lambda: "built"))

        assert offer.resolve() == "built"

    def test_language_provider_receives_language(self):
        """Test that a LanguageDataProvider gets the negotiated language."""
        offer = Offer(data=LanguageDataProvider(lambda lang: f"hello in {lang}"))

        assert offer.resolve("fr") == "hello in fr"

    def test_providers_chain(self):
        """Test that providers returning providers are resolved repeatedly."""
        inner = language_data_provider(lambda lang: lang.upper())
        outer = data_provider(lambda: inner)

        assert resolve_data(outer, "en") == "EN"

    def test_decorator_form(self):
        """Test the decorator helpers."""
        calls = []

        @data_provider
        def report():
            calls.append(1)
            return [1, 2, 3]

        assert isinstance(report, DataProvider)
        assert calls == []
        assert resolve_data(report) == [1, 2, 3]
        assert calls == [1]

    def test_provider_returning_none(self):
        """Test that None is a valid resolved value."""
        assert resolve_data(data_provider(lambda: None)) is None

    def test_depth_limit(self):
        """Test that an endless provider chain raises DataProviderError."""
        def forever():
            return DataProvider(forever)

        with pytest.raises(DataProviderError) as exc_info:
            resolve_data(DataProvider(forever), max_depth=5)

        assert exc_info.value.status_code == 500

    def test_chain_within_limit(self):
        """Test that a chain exactly at the limit still resolves."""
        data = "done"
        for _ in range(3):
            data = DataProvider(lambda d=data: d)

        assert resolve_data(data, max_depth=3) == "done"
