from dataclasses import dataclass
from typing import Optional, Union

from .errors import IsbnError, UnsupportedError


@dataclass(frozen=True)
class ProductRecord:
    isbn_number: str
    superseded: bool = False
    upc: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class Converted:
    source: str
    isbn13: str
    # advisory only; None when the check itself could not run
    checksum_ok: Optional[bool] = None


@dataclass(frozen=True)
class Unsupported:
    source: str
    error: UnsupportedError


@dataclass(frozen=True)
class Failed:
    source: str
    error: IsbnError


ConversionResult = Union[Converted, Unsupported, Failed]
