import logging

from .digits import digit_value
from .errors import LengthError


def isbn10_checksum(isbn: str, log: logging.Logger | None = None) -> str:
    """Mod-11 check digit of an ISBN-10.

    Takes the 9 data digits, or a full 10-character ISBN-10 whose check digit
    is ignored. Only positions 1..8 are summed, weighted 9 down to 2; position
    0 never contributes. Returns "0".."9" or "X".
    """
    if len(isbn) not in (9, 10):
        raise LengthError(f"need 9 or 10 digits - got {len(isbn)}", isbn)

    # position 0 carries no weight but must still be a digit
    digit_value(isbn[0])

    total = 0
    weight = 9
    window = isbn[1:9]
    if log:
        log.debug("input = %s", window)
    for ch in window:
        x = digit_value(ch)
        total += x * weight
        if log:
            log.debug("byte %d x weight %d = %d ; total = %d", x, weight, x * weight, total)
        weight -= 1

    checksum = 11 - (total % 11)
    if checksum == 11:
        checksum = 0
    result = "X" if checksum == 10 else str(checksum)
    if log:
        log.debug("checksum = %s", result)
    return result


def isbn10_verify(isbn: str, log: logging.Logger | None = None) -> bool:
    if len(isbn) != 10:
        raise LengthError(f"need 10 digits - got {len(isbn)}", isbn)
    checksum = isbn10_checksum(isbn, log)
    bit = digit_value(isbn[9], check_digit=True)
    expected = 10 if checksum == "X" else int(checksum)
    if log:
        log.debug("bit = %d ; checksum = %s", bit, checksum)
    return bit == expected


def isbn13_checksum(isbn: str, log: logging.Logger | None = None) -> str:
    """Mod-10 (EAN-13) check digit for the first 12 digits of an ISBN-13.

    From the right, starting at position 1 as odd: odd positions weigh 3, even
    positions weigh 1, and the check digit brings the total to a multiple of 10.
    """
    if len(isbn) != 12:
        raise LengthError(f"need 12 digits - got {len(isbn)}", isbn)

    odd_sum = even_sum = 0
    if log:
        log.debug("isbn = %s", isbn)
    for position, ch in enumerate(reversed(isbn), start=1):
        x = digit_value(ch)
        even = position % 2 == 0
        if log:
            log.debug("%d : %s - %d", position, "eve" if even else "odd", x)
        if even:
            even_sum += x
        else:
            odd_sum += x

    checksum = (10 - (even_sum + odd_sum * 3) % 10) % 10
    if log:
        log.debug("checksum = %d", checksum)
    return str(checksum)


def isbn13_verify(isbn: str, log: logging.Logger | None = None) -> bool:
    if len(isbn) != 13:
        raise LengthError(f"need 13 digits - got {len(isbn)}", isbn)
    return isbn13_checksum(isbn[:12], log) == isbn[12]
