from urllib.parse import urljoin

from ..core.digits import clean_code
from ..core.http import HttpClient
from ..core.models import ProductRecord
from .base import UpcResolver

SUPERSEDED_VALUES = {"1", "true", "yes"}


class CatalogUpcResolver(UpcResolver):
    """Resolves UPCs against a catalog site's lookup page.

    GET {base_url}/upc/{code} lists one element per registered product:

        <li data-isbn="9781600108853" data-superseded="false">Title</li>

    A 404 means the UPC is not registered.
    """

    name = "catalog"

    def __init__(self, http: HttpClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/") + "/"

    def lookup_url(self, code: str) -> str:
        return urljoin(self.base_url, f"upc/{code}")

    def resolve_upc(self, code: str) -> list[ProductRecord]:
        soup = self.http.fetch_soup(self.lookup_url(code), missing_ok=True)
        if soup is None:
            return []

        out: list[ProductRecord] = []
        for el in soup.select("[data-isbn]"):
            isbn = clean_code(el.get("data-isbn", ""))
            if not isbn:
                continue
            superseded = el.get("data-superseded", "").strip().lower() in SUPERSEDED_VALUES
            title = el.get_text(strip=True) or None
            out.append(ProductRecord(isbn_number=isbn, superseded=superseded, upc=code, title=title))
        return out

    def close(self) -> None:
        self.http.close()
