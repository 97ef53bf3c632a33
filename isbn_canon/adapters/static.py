import logging
from typing import Iterable, Mapping

from ..core.digits import clean_code
from ..core.models import ProductRecord
from .base import UpcResolver

logger = logging.getLogger(__name__)


class StaticUpcResolver(UpcResolver):
    """In-memory UPC table, e.g. loaded from a vendor's mapping file."""

    name = "static"

    def __init__(self, table: Mapping[str, Iterable[ProductRecord]] | None = None):
        self._table: dict[str, list[ProductRecord]] = {
            upc: list(records) for upc, records in (table or {}).items()
        }

    @classmethod
    def from_file(cls, path: str) -> "StaticUpcResolver":
        """Load `upc=isbn` lines; blank lines and `#` comments are skipped.

        A UPC listed more than once maps to every ISBN given for it.
        """
        resolver = cls()
        with open(path, encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.split("#", 1)[0].strip()
                if not line:
                    continue
                upc, sep, isbn = line.partition("=")
                upc, isbn = clean_code(upc), clean_code(isbn)
                if not sep or not upc or not isbn:
                    logger.warning("%s:%d: skipping malformed line %r", path, lineno, line)
                    continue
                resolver.add(upc, ProductRecord(isbn_number=isbn, upc=upc))
        return resolver

    def add(self, upc: str, record: ProductRecord) -> None:
        self._table.setdefault(upc, []).append(record)

    def resolve_upc(self, code: str) -> list[ProductRecord]:
        return list(self._table.get(code, []))
