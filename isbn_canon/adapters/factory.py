import logging

from ..config import Settings
from ..core.http import HttpClient
from ..storage.postgres import PostgresStore
from .base import UpcResolver
from .catalog import CatalogUpcResolver
from .static import StaticUpcResolver

logger = logging.getLogger(__name__)


def build_resolver(settings: Settings) -> UpcResolver | None:
    """Postgres when DB_HOST is set, else the HTTP catalog, else a UPC map file."""
    if settings.db_host:
        return PostgresStore(settings.dsn)
    if settings.catalog_url:
        return CatalogUpcResolver(HttpClient(timeout=settings.http_timeout), settings.catalog_url)
    if settings.upc_map:
        return StaticUpcResolver.from_file(settings.upc_map)
    logger.info("no UPC resolver configured; 17-digit codes are unsupported")
    return None
