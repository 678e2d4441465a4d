"""Command-line front end: parse each URL and print its password, encoded form, or decoded form."""

import argparse
import io
import logging
import sys

from typing import Callable, Iterable, Sequence

from .parse import ParseError, parse
from .serialize import serialize_decoded, serialize_encoded
from .uri import Uri

logger: logging.Logger = logging.getLogger(__name__)


def _password(uri: Uri) -> str:
    return uri.password or ""


_MODES: dict[str, Callable[[Uri], str]] = {
    "password": _password,
    "encode": serialize_encoded,
    "decode": serialize_decoded,
}


def parse_command_line_arguments(argv: Sequence[str] | None) -> argparse.Namespace:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="laxuri",
        description="Parse URLs permissively. URLs are read from standard input when none are given.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-p", "--password", dest="mode", action="store_const", const="password", help="Extract password from URL"
    )
    mode.add_argument("-e", "--encode", dest="mode", action="store_const", const="encode", help="Encode URL")
    mode.add_argument("-d", "--decode", dest="mode", action="store_const", const="decode", help="Decode URL")
    parser.set_defaults(mode="decode")
    parser.add_argument("urls", metavar="URL", nargs="*")
    return parser.parse_args(argv)


def process(urls: Iterable[str], mode: str) -> bool:
    """Writes one line per URL to stdout. Returns False if any URL failed to parse."""
    render: Callable[[Uri], str] = _MODES[mode]
    ok: bool = True
    for url in urls:
        try:
            uri: Uri = parse(url)
        except ParseError as e:
            logger.error("unable to parse url %r: %s", url, e)
            ok = False
            continue
        print(render(uri))
    return ok


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    args: argparse.Namespace = parse_command_line_arguments(argv)
    # Decoded octets that aren't UTF-8 are carried as surrogates; write them back as raw bytes.
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="surrogateescape")
    urls: Iterable[str] = args.urls if args.urls else (line.rstrip("\r\n") for line in sys.stdin)
    return 0 if process(urls, args.mode) else 1


if __name__ == "__main__":
    sys.exit(main())
