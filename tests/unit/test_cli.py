"""
Unit tests for the command-line interface.
"""

import pytest

from negotiator.__main__ import build_parser, main, parse_offer
from negotiator.logging import logger as negotiator_logger


@pytest.fixture(autouse=True)
def restore_logger(monkeypatch):
    """main() configures the negotiator logger; put it back afterwards."""
    for name in ("NEGOTIATOR_WEIGHTS", "NEGOTIATOR_MAX_PROVIDER_DEPTH", "NEGOTIATOR_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    handlers = list(negotiator_logger.handlers)
    level = negotiator_logger.level
    propagate = negotiator_logger.propagate
    yield
    negotiator_logger.handlers[:] = handlers
    negotiator_logger.setLevel(level)
    negotiator_logger.propagate = propagate


class TestParseOffer:
    """Tests for --offer parsing."""

    @pytest.mark.parametrize("text,media_type,language", [
        ("text/html:en", "text/html", "en"),
        ("application/json", "application/json", "*"),
        (":fr", "*/*", "fr"),
    ])
    def test_parse_offer(self, text, media_type, language):
        """Test TYPE[:LANG] arguments."""
        offer = parse_offer(text)

        assert offer.media_type == media_type
        assert offer.language == language
        assert offer.data == text


class TestRank:
    """Tests for the rank command."""

    def test_rank_accept(self, capsys):
        """Test the RFC 7231 example ranking."""
        status = main(["rank", "--accept", "text/*, text/plain, text/plain;format=flowed, */*"])

        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "Accept: text/*, text/plain, text/plain;format=flowed, */*",
            "text/plain;format=flowed  q=1",
            "text/plain  q=0.9",
            "text/*  q=0.8",
            "*/*  q=0.7",
        ]

    def test_rank_language(self, capsys):
        """Test ranking Accept-Language."""
        status = main(["rank", "--accept-language", "fr;q=0.5, en-GB"])

        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "Accept-Language: fr;q=0.5, en-GB",
            "en-GB  q=1",
            "fr  q=0.5",
        ]

    def test_rank_defaults_to_accept(self, capsys):
        """Test that no header means an absent Accept header."""
        main(["rank"])

        assert capsys.readouterr().out.splitlines() == ["Accept: ", "*/*  q=1"]


class TestChoose:
    """Tests for the choose command."""

    def test_choose(self, capsys):
        """Test choosing among three offers."""
        status = main([
            "choose",
            "--accept", "text/test, text/*",
            "--accept-language", "en-GB, fr-FR",
            "--offer", "text/html:en",
            "--offer", "text/test:de",
            "--offer", "text/test:en",
        ])

        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "offer:      text/test:en",
            "media type: text/test",
            "language:   en",
            "via:        exact",
        ]

    def test_not_acceptable(self, capsys):
        """Test the 406 exit status."""
        status = main(["choose", "--accept", "image/png", "--offer", "text/html"])

        assert status == 1
        assert capsys.readouterr().out.strip() == "406 Not Acceptable"

    def test_ajax(self, capsys):
        """Test an Ajax request."""
        status = main(["choose", "--ajax", "--accept", "text/html", "--offer", "application/json"])

        out = capsys.readouterr().out
        assert status == 0
        assert "media type: text/plain" in out
        assert "via:        ajax" in out

    def test_no_offers_means_anything(self, capsys):
        """Test that choose without offers offers */*."""
        assert main(["choose"]) == 0
        assert "language:   -" in capsys.readouterr().out


class TestMain:
    """Tests for argument and configuration handling."""

    def test_command_required(self):
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_bad_environment(self, monkeypatch, capsys):
        """Test that invalid configuration exits with status 2."""
        monkeypatch.setenv("NEGOTIATOR_WEIGHTS", "steep")

        assert main(["rank"]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_bad_number_in_environment(self, monkeypatch, capsys):
        """Test that a non-numeric setting is a configuration error."""
        monkeypatch.setenv("NEGOTIATOR_MAX_PROVIDER_DEPTH", "deep")

        assert main(["rank"]) == 2
