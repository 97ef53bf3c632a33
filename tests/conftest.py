import os
import sys

import pytest

# repo root (the directory holding isbn_canon/) on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from isbn_canon.adapters.static import StaticUpcResolver  # noqa: E402
from isbn_canon.core.models import ProductRecord  # noqa: E402


@pytest.fixture
def resolver():
    return StaticUpcResolver(
        {
            "07199025010530299": [ProductRecord("9781600108853")],
            "07199025010599999": [
                ProductRecord("9781600108853"),
                ProductRecord("9781600108853", upc="dup"),
                ProductRecord("9781595828057", superseded=True),
            ],
            "07199025010511111": [
                ProductRecord("9781600108853"),
                ProductRecord("9781595828057"),
            ],
            "07199025010522222": [ProductRecord("9781595828057", superseded=True)],
        }
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("DB_HOST", "DB_NAME", "DB_USER", "DB_PASS", "DB_PORT", "CATALOG_URL", "UPC_MAP", "HTTP_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
