"""
Schema catalog for the content database.

Static, versionless description of every table the site uses. The schema
reconciler treats this as the single source of truth: live tables are only
ever moved towards it by creating tables, adding columns and widening types.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type

import sqlalchemy as sa
from sqlmodel import SQLModel

from models.faq import FAQ
from models.feature import Feature
from models.game_class import GameClass
from models.game_device import GameDevice
from models.game_map import GameMap
from models.game_mode import GameMode
from models.media import Media
from models.news import News
from models.page import Page
from models.site_settings import SiteSettings
from models.types import LongText
from models.user import User
from models.weapon import Weapon


@dataclass(frozen=True)
class Domain:
    """A content collection: the content-tree key and the model backing it."""

    key: str
    model: Type[SQLModel]

    @property
    def table(self) -> sa.Table:
        return self.model.__table__

    @property
    def table_name(self) -> str:
        return self.table.name


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    type_name: str
    nullable: bool
    min_type: Optional[str] = None


# Order matters only for writes: domains are saved in this sequence.
COLLECTION_DOMAINS: Tuple[Domain, ...] = (
    Domain("news", News),
    Domain("classes", GameClass),
    Domain("media", Media),
    Domain("faq", FAQ),
    Domain("features", Feature),
    Domain("weapons", Weapon),
    Domain("maps", GameMap),
    Domain("gameDevices", GameDevice),
    Domain("gameModes", GameMode),
)

PAGE_KEYS: Tuple[str, ...] = ("privacy", "terms")
SETTINGS_KEY = "settings"

# Every key the content tree returned to the site carries.
CONTENT_KEYS: Tuple[str, ...] = (
    "news",
    "classes",
    "media",
    "faq",
    "features",
    "privacy",
    "terms",
    "weapons",
    "maps",
    "gameDevices",
    "gameModes",
    "settings",
)

ALL_MODELS: Tuple[Type[SQLModel], ...] = (
    User,
    *(domain.model for domain in COLLECTION_DOMAINS),
    Page,
    SiteSettings,
)

# Tables whose ``id`` used to be INT AUTO_INCREMENT and must become VARCHAR(36).
ID_MIGRATION_TABLES: Tuple[str, ...] = (
    "users",
    *(domain.table_name for domain in COLLECTION_DOMAINS),
)
STRING_ID_LENGTH = 36

# Tables that may be absent on an older deployment; their columns are only
# touched after an existence check.
OPTIONAL_TABLES = frozenset({"settings"})

# Column of the old single-blob settings table. Its presence means the table
# predates the flattened layout and has to be rebuilt.
LEGACY_SETTINGS_COLUMN = "content"


def get_tables() -> List[sa.Table]:
    """Catalog tables in creation order."""
    return [model.__table__ for model in ALL_MODELS]


def get_table(name: str) -> sa.Table:
    for table in get_tables():
        if table.name == name:
            return table
    raise KeyError(name)


def get_domain(key: str) -> Domain:
    for domain in COLLECTION_DOMAINS:
        if domain.key == key:
            return domain
    raise KeyError(key)


def longtext_columns() -> Dict[str, List[str]]:
    """Map table name -> columns that must be at least LONGTEXT."""
    result: Dict[str, List[str]] = {}
    for table in get_tables():
        names = [column.name for column in table.columns if isinstance(column.type, LongText)]
        if names:
            result[table.name] = names
    return result


def describe_schema() -> Dict[str, List[ColumnSpec]]:
    """
    Build the schema descriptor: per table, the columns it must have.

    Returns:
        Mapping of table name to its column specs, in declaration order
    """
    descriptor: Dict[str, List[ColumnSpec]] = {}
    for table in get_tables():
        descriptor[table.name] = [
            ColumnSpec(
                name=column.name,
                type_name=type(column.type).__name__,
                nullable=bool(column.nullable),
                min_type="LONGTEXT" if isinstance(column.type, LongText) else None,
            )
            for column in table.columns
        ]
    return descriptor
