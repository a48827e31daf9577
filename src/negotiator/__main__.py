"""
=============================================================================
NEGOTIATOR CLI ENTRY POINT
=============================================================================

Inspect how headers are ranked and which offer a request would get,
without writing a server.

=============================================================================
USAGE
=============================================================================

    # How is this Accept header ranked?
    python -m negotiator rank --accept "text/*, text/html;level=1, */*"

    # ...and Accept-Language?
    python -m negotiator rank --accept-language "en-GB, fr;q=0.5"

    # Which offer wins?
    python -m negotiator choose \\
        --accept "text/test, text/*" --accept-language "en-GB, fr-FR" \\
        --offer text/html:en --offer text/test:de --offer text/test:en

    # As an Ajax request
    python -m negotiator choose --ajax --offer application/json

"choose" exits with status 1 when the answer is 406 Not Acceptable.

=============================================================================
"""

import argparse
import sys
from dataclasses import dataclass, replace
from typing import Any, ClassVar, List, Optional, Sequence

from . import __version__
from .config import NegotiatorConfig
from .header import (
    MediaRange,
    PrecedenceValue,
    accept_or_default,
    parse_accept_charset,
    parse_accept_encoding,
    parse_accept_language,
)
from .header.precedence import format_quality
from .http.request import HTTPRequest, XML_HTTP_REQUEST
from .http.response import HTTPResponse
from .http.status_codes import HTTPStatus
from .logging import configure_logging, logging_printer
from .negotiator import Negotiator
from .offer import Offer
from .processor import ResponseProcessor, write_with_newline


@dataclass(frozen=True)
class ReportProcessor(ResponseProcessor):
    """Accepts every media type and writes the offer's label."""

    content_type: str = "text/plain"

    ajax_responder: ClassVar[bool] = True

    def can_process(self, media_range: str, language: str) -> bool:
        return True

    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        write_with_newline(response, str(data))


def _describe(value: str, params, quality: float) -> str:
    text = ";".join([value] + [str(p) for p in params])
    return f"{text}  q={format_quality(quality)}"


def _print_media_ranges(ranges: Sequence[MediaRange]) -> None:
    for mr in ranges:
        print(_describe(mr.value, mr.params, mr.quality))


def _print_values(values: Sequence[PrecedenceValue]) -> None:
    for pv in values:
        print(_describe(pv.value, pv.params, pv.quality))


def parse_offer(text: str) -> Offer:
    """
    Parse a --offer argument: TYPE[:LANG].

    Examples: "text/html:en", "application/json", ":fr" (any type, French)
    """
    media_type, _, language = text.partition(":")
    return Offer(media_type=media_type, language=language, data=text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m negotiator",
        description="HTTP content negotiation: rank Accept headers and choose offers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m negotiator rank --accept "text/*, text/html, */*"
  python -m negotiator rank --accept-language "en-GB, fr;q=0.5"
  python -m negotiator choose --accept "text/*" --offer text/html --offer application/json
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: NEGOTIATOR_LOG_LEVEL or INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"negotiator {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # ─────────────────────────────────────────────────────────────────────
    # rank
    # ─────────────────────────────────────────────────────────────────────

    rank = subparsers.add_parser("rank", help="Show Accept-* headers in precedence order")
    rank.add_argument("--accept", "-a", help="Accept header value")
    rank.add_argument("--accept-language", "-L", help="Accept-Language header value")
    rank.add_argument("--accept-charset", help="Accept-Charset header value")
    rank.add_argument("--accept-encoding", help="Accept-Encoding header value")

    # ─────────────────────────────────────────────────────────────────────
    # choose
    # ─────────────────────────────────────────────────────────────────────

    choose = subparsers.add_parser("choose", help="Choose the best offer for a request")
    choose.add_argument("--accept", "-a", default=None, help="Accept header value")
    choose.add_argument("--accept-language", "-L", default=None, help="Accept-Language header value")
    choose.add_argument(
        "--offer", "-o",
        action="append",
        default=[],
        metavar="TYPE[:LANG]",
        help="An offered media type and optional language (repeatable)"
    )
    choose.add_argument(
        "--ajax",
        action="store_true",
        help="Send X-Requested-With: XMLHttpRequest"
    )

    return parser


def run_rank(args: argparse.Namespace, config: NegotiatorConfig) -> int:
    headers = [
        ("Accept", args.accept, None),
        ("Accept-Language", args.accept_language, parse_accept_language),
        ("Accept-Charset", args.accept_charset, parse_accept_charset),
        ("Accept-Encoding", args.accept_encoding, parse_accept_encoding),
    ]
    requested = [(name, value, parse) for name, value, parse in headers if value is not None]
    if not requested:
        requested = headers[:1]

    for name, value, parse in requested:
        print(f"{name}: {value or ''}")
        if parse is None:
            _print_media_ranges(accept_or_default(value, config.media_range_weights))
        else:
            _print_values(parse(value))

    return 0


def run_choose(args: argparse.Namespace, config: NegotiatorConfig) -> int:
    headers = {}
    if args.accept is not None:
        headers["Accept"] = args.accept
    if args.accept_language is not None:
        headers["Accept-Language"] = args.accept_language
    if args.ajax:
        headers["X-Requested-With"] = XML_HTTP_REQUEST

    offers = [parse_offer(text) for text in args.offer] or [Offer(data="*/*")]

    negotiator = Negotiator.of(
        ReportProcessor(),
        config=config,
        printer=logging_printer(log_format=config.log_format),
    )
    match = negotiator.select(HTTPRequest.from_headers(headers), *offers)

    if match is None:
        status = HTTPStatus.NOT_ACCEPTABLE
        print(f"{int(status)} {status.phrase}")
        return 1

    print(f"offer:      {match.offer.data}")
    print(f"media type: {match.media_type}")
    print(f"language:   {match.language or '-'}")
    print(f"via:        {match.via}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns the process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = NegotiatorConfig.from_env()
        if args.log_level:
            config = replace(config, log_level=args.log_level)
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.log_level, config.log_format)

    if args.command == "rank":
        return run_rank(args, config)
    return run_choose(args, config)


if __name__ == "__main__":
    sys.exit(main())
