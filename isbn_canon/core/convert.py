"""Conversions from scanned and catalog codes to ISBN-13.

Supported inputs, by length:

    10  ISBN-10 (9 data digits + mod-11 check digit)
    13  ISBN-13 / EAN-13: "978" or "979", 9 data digits, mod-10 check digit
    14  ISBN-10 + 4 price digits, as some scanners read 978-less codes
    17  UPC-12 + 5-digit supplement; needs a UpcResolver
    18  ISBN-13 + EAN-5 price supplement

Price supplements are dropped on the way to 13 digits and cannot be recovered.
"""

import logging
from typing import Optional

from .checksum import isbn13_checksum, isbn13_verify
from .digits import (
    BOOKLAND_PREFIX,
    BOOKLAND_PREFIXES,
    has_bookland_prefix,
    strip_bookland_prefix,
    strip_newlines,
    truncate_to,
)
from .errors import (
    AmbiguousError,
    FormatError,
    IsbnError,
    LengthError,
    NotFoundError,
    UnknownLengthError,
    UnsupportedError,
)
from .models import ConversionResult, Converted, Failed, Unsupported

logger = logging.getLogger(__name__)


def convert_10_to_13(isbn: str) -> str:
    """Prepend the Bookland prefix and recompute the check digit.

    The ISBN-10 check digit is replaced, not carried over.
    """
    if len(isbn) != 10:
        raise LengthError(f"need 10 digits - got {len(isbn)}", isbn)
    body = BOOKLAND_PREFIX + isbn[:9]
    return body + isbn13_checksum(body)


# scans as:         16001088571999
# should read:  978 1600108853  // (5) 1999
def convert_14_to_13(code: str) -> str:
    if has_bookland_prefix(code):
        raise FormatError(f"unexpected prefix {BOOKLAND_PREFIX} in {code}", code)
    return convert_10_to_13(truncate_to(code, 10))


def convert_18_to_13(code: str) -> str:
    if not has_bookland_prefix(code):
        raise FormatError(f"expected prefix {BOOKLAND_PREFIX} in {code}", code)
    return truncate_to(code, 13)


def scanned_to_isbn13(scanned: Optional[str]) -> Optional[str]:
    """Best effort: add the Bookland prefix unless present, drop any price code."""
    if not scanned:
        return None
    if not has_bookland_prefix(scanned):
        scanned = BOOKLAND_PREFIX + scanned
    return scanned[:13]


def scanned_to_isbn10(scanned: Optional[str]) -> Optional[str]:
    """Best effort: remove the Bookland prefix, drop any price code.

    The check digit is left as scanned, so the result is only a valid ISBN-10
    when the input already was one.
    """
    if not scanned:
        return None
    return strip_bookland_prefix(scanned)[:10]


def _resolve_upc(code: str, resolver) -> str:
    records = [r for r in resolver.resolve_upc(code) if not r.superseded]
    isbns = list(dict.fromkeys(r.isbn_number for r in records))
    if not isbns:
        raise NotFoundError(f"none found for UPC {code}", code)
    if len(isbns) > 1:
        raise AmbiguousError(f"too many found: {len(isbns)} items for UPC {code}", code)
    return isbns[0]


def _checked(source: str, isbn13: str, log: logging.Logger) -> Converted:
    if not isbn13.startswith(BOOKLAND_PREFIXES):
        log.warning("size %d -> %s : not a Bookland EAN", len(source), isbn13)
    try:
        good = isbn13_verify(isbn13)
    except IsbnError as e:
        log.warning("size %d -> %s : unverifiable (%s)", len(source), isbn13, e)
        return Converted(source, isbn13, None)

    if good:
        log.debug("size %d -> %s : GOOD", len(source), isbn13)
    else:
        log.warning("size %d -> %s : BAD", len(source), isbn13)
    return Converted(source, isbn13, good)


def convert(code: str, resolver=None, log: logging.Logger | None = None) -> ConversionResult:
    """Dispatch on length and report the outcome as a tagged result.

    Checksum verification is advisory: it is recorded on the result and
    logged, never used to reject the output.
    """
    log = log or logger
    code = strip_newlines(code)
    size = len(code)

    try:
        if size == 10:
            log.debug("size 10 -> not supported")
            return Unsupported(code, UnsupportedError("ISBN-10 input is not converted", code))
        if size == 13:
            return _checked(code, code, log)
        if size == 14:
            return _checked(code, convert_14_to_13(code), log)
        if size == 17:
            if resolver is None:
                log.warning("size 17 -> no UPC resolver configured for %s", code)
                return Unsupported(code, UnsupportedError("UPC lookup is not configured", code))
            return _checked(code, _resolve_upc(code, resolver), log)
        if size == 18:
            return _checked(code, convert_18_to_13(code), log)
    except IsbnError as e:
        log.warning("size %d -> %s", size, e)
        return Failed(code, e)

    log.warning("ERROR unknown size %d for %s", size, code)
    return Unsupported(code, UnknownLengthError(f"unknown size {size} for {code}", code))


def convert_to_13(code: str, resolver=None, log: logging.Logger | None = None) -> Optional[str]:
    """Canonical ISBN-13 for `code`, or None when the format is unsupported.

    Malformed input (wrong prefix, too short, unresolvable UPC) raises.
    """
    result = convert(code, resolver=resolver, log=log)
    if isinstance(result, Converted):
        return result.isbn13
    if isinstance(result, Failed):
        raise result.error
    return None


def same_isbn(a: str, b: str, resolver=None) -> bool:
    left = convert(a, resolver=resolver)
    right = convert(b, resolver=resolver)
    if not (isinstance(left, Converted) and isinstance(right, Converted)):
        return False
    return left.isbn13 == right.isbn13
