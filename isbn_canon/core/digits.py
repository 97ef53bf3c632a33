import re

from .errors import FormatError, LengthError

BOOKLAND_PREFIX = "978"
BOOKLAND_PREFIXES = ("978", "979")

ISBN_10_RE = re.compile(r"^[0-9]{9}[0-9Xx]$")
ISBN_13_RE = re.compile(r"^[0-9]{13}$")

_BOOKLAND_RE = re.compile(r"^" + BOOKLAND_PREFIX)
_NEWLINE_RE = re.compile(r"[\r\n]")


def strip_newlines(code: str) -> str:
    return _NEWLINE_RE.sub("", code)


def has_bookland_prefix(code: str) -> bool:
    return code[:3] == BOOKLAND_PREFIX


def strip_bookland_prefix(code: str) -> str:
    return _BOOKLAND_RE.sub("", code, count=1)


def truncate_to(code: str, n: int) -> str:
    if len(code) < n:
        raise LengthError(f"need at least {n} digits - got {len(code)}", code)
    return code[:n]


def digit_value(ch: str, check_digit: bool = False) -> int:
    """Numeric value of one ISBN character.

    "X" means 10, but only in the ISBN-10 check digit position.
    """
    if len(ch) == 1 and "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if check_digit and ch in ("X", "x"):
        return 10
    raise FormatError(f"not a decimal digit: {ch!r}", ch)


def clean_code(raw: str) -> str:
    """Drop the hyphens and blanks catalogs print inside ISBNs."""
    return re.sub(r"[\s\-]", "", raw).upper()
