import argparse
import fileinput
import logging
import sys

import psycopg2
import requests

from isbn_canon.adapters.factory import build_resolver
from isbn_canon.config import load_settings
from isbn_canon.core.convert import convert
from isbn_canon.core.digits import clean_code
from isbn_canon.core.models import Converted, Failed
from isbn_canon.logging_config import setup_logging

logger = logging.getLogger(__name__)


def normalize_lines(lines, resolver=None, out=None) -> tuple[int, int, int]:
    """Write `input<TAB>isbn13` per line; returns (converted, unsupported, failed)."""
    out = out or sys.stdout
    converted = unsupported = failed = 0

    for i, line in enumerate(lines, start=1):
        raw = line.strip()
        if not raw or raw.startswith("#"):
            continue
        try:
            result = convert(clean_code(raw), resolver=resolver)
        except (requests.RequestException, psycopg2.Error) as e:
            logger.error("[line %d] lookup failed for %s: %s", i, raw, e)
            out.write(f"{raw}\tERROR {e}\n")
            failed += 1
            continue

        if isinstance(result, Converted):
            out.write(f"{raw}\t{result.isbn13}\n")
            converted += 1
        elif isinstance(result, Failed):
            out.write(f"{raw}\tERROR {result.error}\n")
            failed += 1
        else:
            out.write(f"{raw}\tUNSUPPORTED {result.error}\n")
            unsupported += 1

    return converted, unsupported, failed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Normalize ISBNs and scanned codes to ISBN-13")
    parser.add_argument("files", nargs="*", help="input files, one code per line (default: stdin)")
    parser.add_argument("--env-file", default=None, help="path to a .env file")
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--no-lookup", action="store_true", help="do not resolve UPC codes")
    args = parser.parse_args(argv)

    settings = load_settings(args.env_file)
    setup_logging(args.log_level or settings.log_level, args.log_file)

    resolver = None if args.no_lookup else build_resolver(settings)
    try:
        with fileinput.input(files=args.files or ("-",)) as lines:
            converted, unsupported, failed = normalize_lines(lines, resolver=resolver)
    finally:
        if resolver is not None:
            resolver.close()

    logger.info("converted=%d unsupported=%d failed=%d", converted, unsupported, failed)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
