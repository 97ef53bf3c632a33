import pytest
import requests
from bs4 import BeautifulSoup

from isbn_canon.adapters.catalog import CatalogUpcResolver
from isbn_canon.adapters.factory import build_resolver
from isbn_canon.adapters.static import StaticUpcResolver
from isbn_canon.config import Settings
from isbn_canon.core.convert import convert_to_13
from isbn_canon.core.http import HttpClient
from isbn_canon.core.models import ProductRecord

LOOKUP_PAGE = """
<html><body>
<h1>UPC 07199025010530299</h1>
<ul>
  <li data-isbn="978-1-60010-885-3" data-superseded="false">Locke &amp; Key</li>
  <li data-isbn="9781600108853">Locke &amp; Key (reprint)</li>
  <li data-isbn="9781595828057" data-superseded="true">Old edition</li>
  <li data-isbn="">broken row</li>
</ul>
</body></html>
"""


class FakeHttp:
    def __init__(self, pages):
        self.pages = pages
        self.requested = []
        self.closed = False

    def fetch_soup(self, url, missing_ok=False):
        self.requested.append(url)
        if url not in self.pages:
            if missing_ok:
                return None
            raise requests.HTTPError("404")
        return BeautifulSoup(self.pages[url], "lxml")

    def close(self):
        self.closed = True


def test_static_resolver():
    r = StaticUpcResolver({"123": [ProductRecord("9781600108853")]})
    r.add("123", ProductRecord("9781595828057", superseded=True))
    assert [p.isbn_number for p in r.resolve_upc("123")] == ["9781600108853", "9781595828057"]
    assert r.resolve_upc("456") == []


def test_static_resolver_returns_copies():
    r = StaticUpcResolver()
    r.add("123", ProductRecord("9781600108853"))
    r.resolve_upc("123").clear()
    assert len(r.resolve_upc("123")) == 1


def test_catalog_resolver_parses_rows():
    url = "https://catalog.example/upc/07199025010530299"
    http = FakeHttp({url: LOOKUP_PAGE})
    resolver = CatalogUpcResolver(http, "https://catalog.example")

    records = resolver.resolve_upc("07199025010530299")

    assert http.requested == [url]
    assert records == [
        ProductRecord("9781600108853", False, "07199025010530299", "Locke & Key"),
        ProductRecord("9781600108853", False, "07199025010530299", "Locke & Key (reprint)"),
        ProductRecord("9781595828057", True, "07199025010530299", "Old edition"),
    ]


def test_catalog_resolver_feeds_dispatcher():
    http = FakeHttp({"https://catalog.example/lookup/upc/07199025010530299": LOOKUP_PAGE})
    resolver = CatalogUpcResolver(http, "https://catalog.example/lookup/")
    assert convert_to_13("07199025010530299", resolver=resolver) == "9781600108853"


def test_catalog_resolver_missing_upc():
    resolver = CatalogUpcResolver(FakeHttp({}), "https://catalog.example")
    assert resolver.resolve_upc("07199025010500000") == []


def test_catalog_resolver_close():
    http = FakeHttp({})
    CatalogUpcResolver(http, "https://catalog.example").close()
    assert http.closed


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_http_client_fetch_soup(monkeypatch):
    http = HttpClient(timeout=3)
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(200, "<p data-isbn='9781600108853'>x</p>")

    monkeypatch.setattr(http.session, "get", fake_get)
    soup = http.fetch_soup("https://catalog.example/upc/1")
    assert soup.select_one("[data-isbn]")["data-isbn"] == "9781600108853"
    assert calls == [("https://catalog.example/upc/1", 3)]


def test_http_client_404(monkeypatch):
    http = HttpClient()
    monkeypatch.setattr(http.session, "get", lambda url, timeout: FakeResponse(404))
    assert http.fetch_soup("https://catalog.example/upc/1", missing_ok=True) is None
    with pytest.raises(requests.HTTPError):
        http.fetch_soup("https://catalog.example/upc/1")


def test_build_resolver_none():
    assert build_resolver(Settings()) is None


def test_build_resolver_catalog():
    resolver = build_resolver(Settings(catalog_url="https://catalog.example", http_timeout=5))
    assert isinstance(resolver, CatalogUpcResolver)
    assert resolver.http.timeout == 5
    assert resolver.lookup_url("123") == "https://catalog.example/upc/123"


def test_build_resolver_prefers_postgres(monkeypatch):
    seen = []

    def fake_connect(dsn):
        seen.append(dsn)
        return object()

    monkeypatch.setattr("isbn_canon.storage.postgres.psycopg2.connect", fake_connect)
    resolver = build_resolver(Settings(db_host="db", db_name="books", catalog_url="https://catalog.example"))
    assert resolver.name == "postgres"
    assert seen == ["host=db dbname=books user=None password=None port=5432"]


def test_static_resolver_from_file(tmp_path, caplog):
    upc_map = tmp_path / "upc-map"
    upc_map.write_text(
        "# vendor UPC table\n"
        "07199025010530299=978-1-60010-885-3\n"
        "\n"
        "07199025010511111=9781600108853  # first printing\n"
        "07199025010511111=9781595828057\n"
        "not a mapping\n"
    )

    resolver = StaticUpcResolver.from_file(str(upc_map))

    assert resolver.resolve_upc("07199025010530299") == [
        ProductRecord("9781600108853", upc="07199025010530299"),
    ]
    assert [r.isbn_number for r in resolver.resolve_upc("07199025010511111")] == [
        "9781600108853",
        "9781595828057",
    ]
    assert "skipping malformed line" in caplog.text
    assert convert_to_13("07199025010530299", resolver=resolver) == "9781600108853"


def test_build_resolver_upc_map(tmp_path):
    upc_map = tmp_path / "upc-map"
    upc_map.write_text("07199025010530299=9781600108853\n")

    resolver = build_resolver(Settings(upc_map=str(upc_map)))

    assert isinstance(resolver, StaticUpcResolver)
    assert resolver.resolve_upc("07199025010530299")[0].isbn_number == "9781600108853"


def test_build_resolver_catalog_wins_over_upc_map(tmp_path):
    resolver = build_resolver(Settings(catalog_url="https://catalog.example", upc_map=str(tmp_path / "unused")))
    assert isinstance(resolver, CatalogUpcResolver)
