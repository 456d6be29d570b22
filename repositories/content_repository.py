"""
Content repository for the site content tree.

Reads every content table concurrently and rebuilds the JSON tree the site
renders, and saves a submitted tree in a single transaction.

Saves replace each submitted collection wholesale (clear + batched insert).
There is no application-level locking: two concurrent saves are ordered by the
database and the last commit wins for every domain both touch.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import sqlalchemy as sa
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from models.catalog import (
    COLLECTION_DOMAINS,
    CONTENT_KEYS,
    PAGE_KEYS,
    SETTINGS_KEY,
    Domain,
    get_domain,
    get_table,
)
from models.site_settings import MAIN_SETTINGS_ID
from models.types import MYSQL_DIALECTS
from utils.content_codec import (
    decode_page,
    decode_row,
    decode_settings,
    encode_page,
    encode_row,
    encode_settings,
    encode_timestamp,
)
from utils.errors import ContentReadError, ContentWriteError

logger = logging.getLogger(__name__)

PAGES_QUERY = "pages"
SETTINGS_QUERY = "settings"


class ContentRepository:
    """Data access for the whole content tree."""

    def __init__(self, engine: Engine, max_workers: Optional[int] = None):
        """
        Initialize repository.

        Args:
            engine: Engine whose pool serves every content query
            max_workers: Threads used for the concurrent per-table reads
        """
        self.engine = engine
        self.max_workers = max_workers or settings.MAX_WORKER_THREADS

    # -------------------------
    # Read
    # -------------------------

    def fetch_all(self) -> Dict[str, Any]:
        """
        Read every domain and rebuild the content tree.

        Returns:
            Content tree with every key present. Missing pages and settings
            come back in their default shape, never as None.

        Raises:
            ContentReadError: If any table query fails
        """
        statements = self._read_statements()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {key: executor.submit(self._fetch_rows, stmt) for key, stmt in statements.items()}
            results: Dict[str, List[Dict[str, Any]]] = {}
            try:
                for key, future in futures.items():
                    results[key] = future.result()
            except SQLAlchemyError as exc:
                for future in futures.values():
                    future.cancel()
                logger.error(f"Error fetching content ({key}): {exc}")
                raise ContentReadError(f"Failed to read {key}: {exc}") from exc

        tree: Dict[str, Any] = {}
        for domain in COLLECTION_DOMAINS:
            tree[domain.key] = [decode_row(domain, row) for row in results[domain.key]]

        pages = {str(row["id"]): row for row in results[PAGES_QUERY]}
        for key in PAGE_KEYS:
            tree[key] = decode_page(pages.get(key))

        settings_rows = results[SETTINGS_QUERY]
        tree[SETTINGS_KEY] = decode_settings(settings_rows[0] if settings_rows else None)

        return {key: tree[key] for key in CONTENT_KEYS}

    def fetch_collection(self, key: str) -> List[Dict[str, Any]]:
        """Read a single collection domain, e.g. ``"weapons"``."""
        domain = get_domain(key)
        try:
            rows = self._fetch_rows(self._collection_statement(domain))
        except SQLAlchemyError as exc:
            logger.error(f"Error fetching {key}: {exc}")
            raise ContentReadError(f"Failed to read {key}: {exc}") from exc
        return [decode_row(domain, row) for row in rows]

    def _read_statements(self) -> Dict[str, sa.Select]:
        statements = {domain.key: self._collection_statement(domain) for domain in COLLECTION_DOMAINS}

        pages = get_table("pages")
        statements[PAGES_QUERY] = sa.select(pages).where(pages.c.id.in_(PAGE_KEYS))

        settings_table = get_table("settings")
        statements[SETTINGS_QUERY] = sa.select(settings_table).where(settings_table.c.id == MAIN_SETTINGS_ID)
        return statements

    @staticmethod
    def _collection_statement(domain: Domain) -> sa.Select:
        table = domain.table
        return sa.select(table).order_by(table.c.sort_order, table.c.created_at, table.c.id)

    def _fetch_rows(self, statement: sa.Select) -> List[Dict[str, Any]]:
        # One pooled connection per query, returned to the pool on exit.
        with self.engine.connect() as conn:
            return [dict(row) for row in conn.execute(statement).mappings()]

    # -------------------------
    # Write
    # -------------------------

    def save_all(self, content: Mapping[str, Any]) -> None:
        """
        Persist a (possibly partial) content tree in one transaction.

        Domains whose key is absent from ``content`` are left untouched; a key
        present with an empty collection clears that domain. Domains are
        written in ``CONTENT_KEYS`` order.

        Args:
            content: Content tree as sent by the admin UI

        Raises:
            ContentWriteError: If any step fails. Nothing is committed.
        """
        if not isinstance(content, Mapping):
            raise ContentWriteError("Content must be an object")

        now = encode_timestamp(datetime.utcnow())
        try:
            with self.engine.begin() as conn:
                for key in CONTENT_KEYS:
                    if key not in content:
                        continue
                    if key in PAGE_KEYS:
                        self._replace_page(conn, key, content[key])
                    elif key == SETTINGS_KEY:
                        self._upsert_settings(conn, content[key], now)
                    else:
                        self._replace_collection(conn, get_domain(key), content[key], now)
        except SQLAlchemyError as exc:
            message = str(getattr(exc, "orig", None) or exc)
            logger.error(f"Error saving content, transaction rolled back: {message}")
            raise ContentWriteError(message) from exc
        except ContentWriteError as exc:
            logger.error(f"Error saving content, transaction rolled back: {exc}")
            raise
        except (AttributeError, TypeError, ValueError) as exc:
            logger.error(f"Malformed content, transaction rolled back: {exc}")
            raise ContentWriteError(f"Malformed content: {exc}") from exc

        logger.info(f"Saved content domains: {', '.join(k for k in CONTENT_KEYS if k in content)}")

    def _replace_collection(self, conn: Connection, domain: Domain, items: Any, now: str) -> None:
        items = items or []
        if not isinstance(items, list) or not all(isinstance(item, Mapping) for item in items):
            raise ContentWriteError(f"'{domain.key}' must be a list of objects")

        table = domain.table
        # DELETE rather than TRUNCATE: TRUNCATE commits implicitly on MariaDB.
        conn.execute(table.delete())
        if not items:
            return

        rows = [encode_row(domain, item, position=index) for index, item in enumerate(items)]
        for row in rows:
            if row["created_at"] is None:
                row["created_at"] = now
        conn.execute(table.insert(), rows)

    def _replace_page(self, conn: Connection, key: str, page: Any) -> None:
        if page is not None and not isinstance(page, Mapping):
            raise ContentWriteError(f"'{key}' must be an object")

        pages = get_table("pages")
        conn.execute(pages.delete().where(pages.c.id == key))
        if page:
            conn.execute(pages.insert().values(**encode_page(key, page)))

    def _upsert_settings(self, conn: Connection, settings_obj: Any, now: str) -> None:
        if settings_obj is not None and not isinstance(settings_obj, Mapping):
            raise ContentWriteError("'settings' must be an object")
        settings_obj = settings_obj or {}
        for group in ("branding", "seo"):
            if settings_obj.get(group) is not None and not isinstance(settings_obj[group], Mapping):
                raise ContentWriteError(f"'settings.{group}' must be an object")
        keywords = (settings_obj.get("seo") or {}).get("defaultKeywords")
        if keywords is not None and not isinstance(keywords, (list, str)):
            raise ContentWriteError("'settings.seo.defaultKeywords' must be a list")

        table = get_table("settings")
        row = encode_settings(settings_obj, updated_at=now)
        updates = [name for name in row if name != "id"]
        dialect = conn.dialect.name

        if dialect in MYSQL_DIALECTS:
            stmt = mysql.insert(table).values(**row)
            stmt = stmt.on_duplicate_key_update({name: stmt.inserted[name] for name in updates})
        elif dialect in ("sqlite", "postgresql"):
            insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
            stmt = insert(table).values(**row)
            stmt = stmt.on_conflict_do_update(
                index_elements=[table.c.id],
                set_={name: stmt.excluded[name] for name in updates},
            )
        else:
            conn.execute(table.delete().where(table.c.id == MAIN_SETTINGS_ID))
            stmt = table.insert().values(**row)
        conn.execute(stmt)
