from typing import Optional

import requests
from bs4 import BeautifulSoup

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; isbnCanon/0.1)",
    "Accept": "text/html",
}


class HttpClient:
    """Shared session for catalog lookups. Timeouts are set here, not by callers."""

    def __init__(self, headers=None, timeout: float = 25):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(headers or DEFAULT_HEADERS)

    def fetch_soup(self, url: str, missing_ok: bool = False) -> Optional[BeautifulSoup]:
        r = self.session.get(url, timeout=self.timeout)
        if missing_ok and r.status_code == 404:
            return None
        r.raise_for_status()
        return BeautifulSoup(r.text, "lxml")

    def close(self) -> None:
        self.session.close()
