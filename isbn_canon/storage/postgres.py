from typing import Optional

import psycopg2
import psycopg2.extras

from ..adapters.base import UpcResolver
from ..config import load_settings
from ..core.convert import convert_to_13
from ..core.errors import UnsupportedError
from ..core.models import ProductRecord


class PostgresStore(UpcResolver):
    """Products keyed by canonical ISBN-13, plus the UPCs printed on them.

    A product that was re-issued under another record keeps its row and
    points at the replacement through replaced_by_id; UPC lookups report it
    as superseded.
    """

    name = "postgres"

    def __init__(self, dsn: Optional[str] = None, conn=None):
        if conn is None:
            conn = psycopg2.connect(dsn or load_settings().dsn)
        self.conn = conn

    def close(self):
        self.conn.close()

    def init_schema(self):
        cur = self.conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS products (
              id BIGSERIAL PRIMARY KEY,
              isbn13 TEXT NOT NULL UNIQUE,
              title TEXT,
              replaced_by_id BIGINT REFERENCES products(id),
              created_at TIMESTAMPTZ NOT NULL DEFAULT now()
            );

            CREATE TABLE IF NOT EXISTS item_codes (
              id BIGSERIAL PRIMARY KEY,
              upc TEXT NOT NULL,
              product_id BIGINT NOT NULL REFERENCES products(id),
              created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
              UNIQUE(upc, product_id)
            );

            CREATE INDEX IF NOT EXISTS idx_item_codes_upc ON item_codes(upc);
            """
        )
        self.conn.commit()

    def _write(self, sql: str, params: tuple):
        cur = self.conn.cursor()
        try:
            cur.execute(sql, params)
            row = cur.fetchone()
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        return row

    def add_product(self, code: str, title: Optional[str] = None) -> int:
        """Store a product under the ISBN-13 form of `code`; returns its id."""
        isbn13 = convert_to_13(code)
        if isbn13 is None:
            raise UnsupportedError(f"cannot store {code}: no ISBN-13 form", code)
        row = self._write(
            """
            INSERT INTO products(isbn13, title)
            VALUES (%s, %s)
            ON CONFLICT (isbn13) DO UPDATE SET
              title = COALESCE(EXCLUDED.title, products.title)
            RETURNING id
            """,
            (isbn13, title),
        )
        return int(row[0])

    def add_item_code(self, upc: str, product_id: int) -> int:
        row = self._write(
            """
            INSERT INTO item_codes(upc, product_id)
            VALUES (%s, %s)
            ON CONFLICT (upc, product_id) DO UPDATE SET upc = EXCLUDED.upc
            RETURNING id
            """,
            (upc, product_id),
        )
        return int(row[0])

    def supersede(self, product_id: int, replaced_by_id: int) -> None:
        cur = self.conn.cursor()
        try:
            cur.execute(
                "UPDATE products SET replaced_by_id = %s WHERE id = %s",
                (replaced_by_id, product_id),
            )
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def get_product_by_isbn(self, isbn13: str):
        cur = self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
        cur.execute("SELECT * FROM products WHERE isbn13=%s", (isbn13,))
        row = cur.fetchone()
        return dict(row) if row else None

    def resolve_upc(self, code: str) -> list[ProductRecord]:
        try:
            with self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(
                    """
                    SELECT p.isbn13, p.title, p.replaced_by_id
                    FROM item_codes ic
                    JOIN products p ON p.id = ic.product_id
                    WHERE ic.upc = %s
                    ORDER BY p.id ASC
                    """,
                    (code,),
                )
                rows = cur.fetchall()
        except Exception:
            # leave the connection usable after a failed statement
            self.conn.rollback()
            raise

        return [
            ProductRecord(
                isbn_number=r["isbn13"],
                superseded=r["replaced_by_id"] is not None,
                upc=code,
                title=r["title"],
            )
            for r in rows
        ]
