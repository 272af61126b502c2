"""Command that prints the registrable domain of each URL given."""

from __future__ import annotations

import argparse
import re
import sys

from . import api
from .errors import TLDError
from .options import DEFAULT_TIMEOUT, PUBLIC_SUFFIX_FILE_URL, Options

DEFAULT_URLS = (
    "nlaak.com",
    "https://nlaak.com",
    "http://go.com?foo=bar",
    "http://google.com",
    "http://blog.google",
    "https://www.medi-cal.ca.gov/",
    "https://ato.gov.au",
    "http://stage.host.domain.co.uk/",
    "http://a.very.complex-domain.co.uk:8080/foo/bar",
)

ALLOWED_ORIGINS = ("example.com", "trusted.org", "api.service.com")

ORIGINS_TO_CHECK = (
    "https://example.com",
    "http://malicious.com",
    "https://trusted.org/path",
    "https://subdomain.example.com",
)

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _parse_duration(text: str) -> float:
    """Parse durations such as ``10s``, ``1m30s`` or ``500ms`` into seconds."""
    try:
        return float(text)
    except ValueError:
        pass
    if not text:
        raise argparse.ArgumentTypeError("empty duration")
    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise argparse.ArgumentTypeError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    return total


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="suffixfqdn", description="Show the registrable domain of URLs."
    )
    parser.add_argument("--private", action="store_true", help="Allow private TLDs")
    parser.add_argument(
        "--timeout",
        type=_parse_duration,
        default=DEFAULT_TIMEOUT,
        help="Timeout for HTTP requests (e.g. 10s)",
    )
    parser.add_argument("--url", default="", help="Custom URL for public suffix list")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("urls", nargs="*", help="URLs to analyse")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command; return the exit status."""
    args = _build_parser().parse_args(argv)
    log_stream = sys.stdout if args.verbose else sys.stderr

    options = Options(
        allow_private_tlds=args.private,
        timeout=args.timeout,
        public_suffix_url=args.url or PUBLIC_SUFFIX_FILE_URL,
    )
    try:
        api.init(options)
    except TLDError as exc:
        print(f"Failed to initialize: {exc}", file=log_stream)
        return 1

    urls = args.urls or list(DEFAULT_URLS)

    print("URL Analysis Results")
    print("-------------------")
    print(f"{'Original URL':<50} | {'FQDN':<30} | Status")
    print("-" * 100)
    for url in urls:
        try:
            domain = api.get_fqdn(url)
        except TLDError as exc:
            print(f"{url:<50} | {'-':<30} | ERROR: {exc}")
        else:
            print(f"{url:<50} | {domain:<30} | SUCCESS")

    print("\nOrigin Validation")
    print("----------------")
    print(f"Allowed origins: {', '.join(ALLOWED_ORIGINS)}\n")
    for origin in ORIGINS_TO_CHECK:
        status = "VALID" if api.validate_origin(origin, ALLOWED_ORIGINS) else "INVALID"
        print(f"{origin:<40} | {status}")
    return 0


if __name__ == "__main__":
    sys.exit(main())