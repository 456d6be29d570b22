"""
Schema reconciliation.

Brings a live database to the shape described by ``models.catalog`` on every
process start. There is no migration-version table: every change checks the
current state first and only applies what is missing, so running it again
(or against a partially migrated database) is safe.

Each change runs in its own transaction. A failing change is logged and
recorded in the report, and the remaining changes still run; reconciliation
never blocks startup.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional
from uuid import uuid4

import sqlalchemy as sa
from sqlalchemy.engine import Connection, Dialect, Engine
from sqlalchemy.schema import CreateColumn

from config.settings import Settings, settings as default_settings
from models.catalog import (
    ID_MIGRATION_TABLES,
    LEGACY_SETTINGS_COLUMN,
    OPTIONAL_TABLES,
    STRING_ID_LENGTH,
    get_table,
    get_tables,
    longtext_columns,
)
from models.types import MYSQL_DIALECTS
from utils.database import build_server_engine
from utils.errors import ReconciliationError
from utils.security import hash_password

logger = logging.getLogger(__name__)


@dataclass
class SchemaChange:
    """One self-checking schema change.

    ``check`` returns True when the change still needs to be applied.
    """

    name: str
    check: Callable[[Connection], bool]
    apply: Callable[[Connection], None]


@dataclass
class ReconciliationReport:
    applied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[ReconciliationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


# ---------------------------------------------------------------------------
# DDL builders
# ---------------------------------------------------------------------------

def is_mysql(dialect: Dialect) -> bool:
    return dialect.name in MYSQL_DIALECTS


def add_column_sql(table: sa.Table, column: sa.Column, dialect: Dialect) -> str:
    """
    ALTER TABLE ... ADD COLUMN for a catalog column.

    SQLite cannot add a column whose default is an expression such as
    CURRENT_TIMESTAMP, so there the column is added as plain nullable and
    existing rows keep NULL.
    """
    quote = dialect.identifier_preparer.quote_identifier
    if dialect.name == "sqlite" and _has_expression_default(column):
        column = sa.Column(column.name, column.type, nullable=True)
    column_ddl = str(CreateColumn(column).compile(dialect=dialect)).strip()
    if_not_exists = " IF NOT EXISTS" if is_mysql(dialect) else ""
    return f"ALTER TABLE {quote(table.name)} ADD COLUMN{if_not_exists} {column_ddl}"


def _has_expression_default(column: sa.Column) -> bool:
    default = column.server_default
    return default is not None and isinstance(getattr(default, "arg", None), sa.TextClause)


def widen_column_sql(table_name: str, column_name: str, dialect: Dialect) -> str:
    quote = dialect.identifier_preparer.quote_identifier
    return f"ALTER TABLE {quote(table_name)} MODIFY {quote(column_name)} LONGTEXT"


def id_migration_sql(table_name: str, integer_type: str, dialect: Dialect) -> List[str]:
    """
    Statements moving an integer ``id`` to ``VARCHAR(36)``.

    MariaDB refuses to turn an AUTO_INCREMENT column into a string column in
    one statement, so the column is first re-declared as a plain integer.
    Existing values are kept as their decimal text.
    """
    quote = dialect.identifier_preparer.quote_identifier
    table = quote(table_name)
    column = quote("id")
    return [
        f"ALTER TABLE {table} MODIFY {column} {integer_type} NOT NULL",
        f"ALTER TABLE {table} MODIFY {column} VARCHAR({STRING_ID_LENGTH}) NOT NULL",
    ]


def _live_columns(conn: Connection, table_name: str) -> dict:
    inspector = sa.inspect(conn)
    if not inspector.has_table(table_name):
        return {}
    return {column["name"]: column for column in inspector.get_columns(table_name)}


def _has_table(conn: Connection, table_name: str) -> bool:
    return sa.inspect(conn).has_table(table_name)


def _is_integer_type(column_type) -> bool:
    if isinstance(column_type, sa.Integer):
        return True
    return "INT" in str(column_type).upper()


def _is_longtext(column_type) -> bool:
    return str(column_type).upper().startswith("LONGTEXT")


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------

class SchemaReconciler:
    """
    Applies the schema catalog to a live database.

    Usage:
        report = SchemaReconciler(get_engine()).run()
    """

    def __init__(
        self,
        engine: Engine,
        app_settings: Optional[Settings] = None,
        server_engine_factory: Callable[[str], Engine] = build_server_engine,
    ):
        """
        Initialize reconciler.

        Args:
            engine: Engine bound to the content database
            app_settings: Settings holding the bootstrap account
            server_engine_factory: Builds the short-lived server-level engine
                used for CREATE DATABASE
        """
        self.engine = engine
        self.settings = app_settings or default_settings
        self.server_engine_factory = server_engine_factory
        self.report = ReconciliationReport()

    @property
    def is_mysql(self) -> bool:
        return is_mysql(self.engine.dialect)

    def run(self) -> ReconciliationReport:
        """
        Run every reconciliation step in order.

        Returns:
            Report of applied, skipped and failed changes
        """
        self.report = ReconciliationReport()
        self.ensure_database()
        self.reset_incompatible_singletons()
        self.ensure_tables()
        self.ensure_columns()
        self.widen_text_columns()
        self.migrate_identifier_columns()
        # After the id migration so the bootstrap row gets a string id.
        self.ensure_admin_account()

        logger.info(
            f"Schema reconciliation finished: {len(self.report.applied)} applied, "
            f"{len(self.report.skipped)} up to date, {len(self.report.failed)} failed"
        )
        return self.report

    # -------------------------
    # Change execution
    # -------------------------

    def apply_changes(self, changes: List[SchemaChange]) -> None:
        for change in changes:
            self.apply_change(change)

    def apply_change(self, change: SchemaChange) -> bool:
        """
        Check and, if needed, apply one change in its own transaction.

        Returns:
            True if the change was applied
        """
        try:
            with self.engine.begin() as conn:
                if not change.check(conn):
                    self.report.skipped.append(change.name)
                    return False
                change.apply(conn)
        except Exception as exc:
            error = ReconciliationError(change.name, str(exc))
            self.report.failed.append(error)
            logger.warning(f"Schema change '{change.name}' failed, continuing: {exc}")
            return False

        self.report.applied.append(change.name)
        logger.info(f"Applied schema change '{change.name}'")
        return True

    # -------------------------
    # Steps
    # -------------------------

    def ensure_database(self) -> None:
        """Create the database on the server if it does not exist yet."""
        url = self.engine.url
        name = "create database"
        if url.get_backend_name() == "sqlite" or not url.database:
            self.report.skipped.append(name)
            return

        try:
            server_engine = self.server_engine_factory(url.render_as_string(hide_password=False))
            try:
                with server_engine.begin() as conn:
                    if url.database in sa.inspect(conn).get_schema_names():
                        self.report.skipped.append(name)
                        return
                    quoted = conn.dialect.identifier_preparer.quote_identifier(url.database)
                    conn.execute(sa.text(f"CREATE DATABASE IF NOT EXISTS {quoted}"))
            finally:
                server_engine.dispose()
        except Exception as exc:
            # Later steps report their own errors if the database is missing.
            self.report.failed.append(ReconciliationError(name, str(exc)))
            logger.error(f"Error creating database '{url.database}': {exc}")
            return

        self.report.applied.append(name)
        logger.info(f"Created database '{url.database}'")

    def reset_incompatible_singletons(self) -> None:
        """Rebuild the settings table if it still has the legacy blob layout."""
        settings_table = get_table("settings")

        def check(conn: Connection) -> bool:
            return LEGACY_SETTINGS_COLUMN in _live_columns(conn, settings_table.name)

        def apply(conn: Connection) -> None:
            logger.warning("Dropping legacy settings table; stored settings are discarded")
            quoted = conn.dialect.identifier_preparer.quote_identifier(settings_table.name)
            conn.execute(sa.text(f"DROP TABLE {quoted}"))
            settings_table.create(conn, checkfirst=True)

        self.apply_change(SchemaChange("reset legacy settings table", check, apply))

    def ensure_tables(self) -> None:
        changes = [
            SchemaChange(
                f"create table {table.name}",
                check=lambda conn, name=table.name: not _has_table(conn, name),
                apply=lambda conn, t=table: t.create(conn, checkfirst=True),
            )
            for table in get_tables()
        ]
        self.apply_changes(changes)

    def ensure_admin_account(self) -> None:
        """Create the bootstrap admin account when there are no users at all."""
        users = get_table("users")
        username = self.settings.DEFAULT_ADMIN_USERNAME

        def check(conn: Connection) -> bool:
            count = conn.execute(sa.select(sa.func.count()).select_from(users)).scalar_one()
            return count == 0

        def apply(conn: Connection) -> None:
            conn.execute(
                users.insert().values(
                    id=str(uuid4()),
                    username=username,
                    password_hash=hash_password(
                        self.settings.DEFAULT_ADMIN_PASSWORD, rounds=self.settings.BCRYPT_ROUNDS
                    ),
                    role="admin",
                )
            )
            logger.info(f"Default admin user '{username}' created")

        self.apply_change(SchemaChange("create default admin user", check, apply))

    def ensure_columns(self) -> None:
        """Add catalog columns missing from existing tables."""
        changes = []
        for table in get_tables():
            for column in table.columns:
                if column.primary_key:
                    continue
                changes.append(self._add_column_change(table, column))
        self.apply_changes(changes)

    def _add_column_change(self, table: sa.Table, column: sa.Column) -> SchemaChange:
        def check(conn: Connection) -> bool:
            live = _live_columns(conn, table.name)
            if not live:
                if table.name in OPTIONAL_TABLES:
                    logger.debug(f"Optional table {table.name} absent, skipping {column.name}")
                return False
            return column.name not in live

        def apply(conn: Connection) -> None:
            conn.execute(sa.text(add_column_sql(table, column, conn.dialect)))

        return SchemaChange(f"add column {table.name}.{column.name}", check, apply)

    def widen_text_columns(self) -> None:
        """Widen media-carrying text columns to LONGTEXT (MariaDB/MySQL only)."""
        if not self.is_mysql:
            logger.debug("Skipping LONGTEXT widening: not a MySQL-family database")
            return

        changes = []
        for table_name, column_names in longtext_columns().items():
            for column_name in column_names:
                changes.append(self._widen_change(table_name, column_name))
        self.apply_changes(changes)

    def _widen_change(self, table_name: str, column_name: str) -> SchemaChange:
        def check(conn: Connection) -> bool:
            live = _live_columns(conn, table_name)
            if column_name not in live:
                return False
            return not _is_longtext(live[column_name]["type"])

        def apply(conn: Connection) -> None:
            conn.execute(sa.text(widen_column_sql(table_name, column_name, conn.dialect)))

        return SchemaChange(f"widen {table_name}.{column_name} to LONGTEXT", check, apply)

    def migrate_identifier_columns(self) -> None:
        """Move integer ``id`` columns to string ids (MariaDB/MySQL only)."""
        if not self.is_mysql:
            logger.debug("Skipping id migration: not a MySQL-family database")
            return
        self.apply_changes([self._id_migration_change(name) for name in ID_MIGRATION_TABLES])

    def _id_migration_change(self, table_name: str) -> SchemaChange:
        def check(conn: Connection) -> bool:
            live = _live_columns(conn, table_name)
            return "id" in live and _is_integer_type(live["id"]["type"])

        def apply(conn: Connection) -> None:
            live_type = _live_columns(conn, table_name)["id"]["type"]
            integer_type = live_type.compile(dialect=conn.dialect)
            for statement in id_migration_sql(table_name, integer_type, conn.dialect):
                conn.execute(sa.text(statement))

        return SchemaChange(f"migrate {table_name}.id to VARCHAR({STRING_ID_LENGTH})", check, apply)
