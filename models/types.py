"""
Column types shared by the content tables.

The MariaDB DDL for these is emitted through ``sqlalchemy.ext.compiler`` so the
same table definitions create a usable schema on SQLite (tests, local runs).
"""

from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.ext.compiler import compiles

MYSQL_DIALECTS = ("mysql", "mariadb")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONText(sa.Text):
    """Structured column: JSON on MariaDB, carried as JSON text by the driver.

    Values are serialized by the content codec, so this type does no
    (de)serialization of its own.
    """

    __visit_name__ = "json_text"


class LongText(sa.Text):
    """Text column that must hold base64-encoded media."""

    __visit_name__ = "long_text"


@compiles(JSONText)
def _compile_json_text(type_, compiler, **kw):
    return "TEXT"


@compiles(LongText)
def _compile_long_text(type_, compiler, **kw):
    return "TEXT"


for _dialect in MYSQL_DIALECTS:
    compiles(JSONText, _dialect)(lambda type_, compiler, **kw: "JSON")
    compiles(LongText, _dialect)(lambda type_, compiler, **kw: "LONGTEXT")


class Timestamp(sa.types.TypeDecorator):
    """TIMESTAMP column that also accepts ``YYYY-MM-DD HH:MM:SS`` text on bind."""

    impl = sa.DateTime
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name in MYSQL_DIALECTS:
            return dialect.type_descriptor(sa.TIMESTAMP())
        return dialect.type_descriptor(sa.DateTime())

    def process_bind_param(self, value, dialect) -> Optional[datetime]:
        if value is None or isinstance(value, datetime):
            return value
        return datetime.strptime(str(value), TIMESTAMP_FORMAT)


def created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        Timestamp(),
        nullable=True,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def sort_order_column() -> sa.Column:
    """Position of the row in its collection as last saved."""
    return sa.Column("sort_order", sa.Integer, nullable=True)
