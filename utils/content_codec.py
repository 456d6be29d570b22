"""
Content codec.

Converts between the JSON content tree used by the site and the flat column
values stored in the content tables:

- Structured fields (details, devices, stats, media, rules, sections, ...) are
  written as JSON text and parsed back on read.
- Ids are always strings in the tree, whatever the column type.
- Timestamps are written as ``YYYY-MM-DD HH:MM:SS`` and read back as ISO-8601.
- Settings are flattened into scalar/JSON columns and rebuilt on read, with
  every sub-object defaulted independently.

Decoding is tolerant: the driver may hand back a structured column as text or
as an already-parsed value, and malformed JSON text is returned unchanged.
"""

import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from uuid import uuid4

from models.catalog import Domain
from models.site_settings import MAIN_SETTINGS_ID
from models.types import JSONText, TIMESTAMP_FORMAT

CREATED_AT_COLUMN = "created_at"
CREATED_AT_KEY = "createdAt"
SORT_COLUMN = "sort_order"

# (group, tree key, column) for settings stored as plain columns
SETTINGS_SCALARS: Tuple[Tuple[str, str, str], ...] = (
    ("branding", "siteName", "site_name"),
    ("branding", "siteTagline", "site_tagline"),
    ("branding", "logoUrl", "logo_url"),
    ("branding", "faviconUrl", "favicon_url"),
    ("branding", "copyrightText", "copyright_text"),
    ("branding", "poweredByText", "powered_by_text"),
    ("seo", "defaultTitle", "seo_title"),
    ("seo", "defaultDescription", "seo_description"),
    ("seo", "ogImage", "og_image"),
    ("seo", "twitterHandle", "twitter_handle"),
)

# (tree key, column, default factory) for settings stored as JSON
SETTINGS_STRUCTURED: Tuple[Tuple[str, str, Callable[[], Any]], ...] = (
    ("socialLinks", "social_links", list),
    ("theme", "theme", dict),
    ("backgrounds", "backgrounds", dict),
    ("homepageSections", "homepage_sections", list),
    ("hero", "hero", dict),
    ("cta", "cta", dict),
    ("newsSection", "news_section", dict),
    ("customSections", "custom_sections", dict),
)

KEYWORDS_COLUMN = "seo_keywords"


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def encode_json(value: Any) -> Optional[str]:
    """Serialize a structured field to JSON text. ``None`` stays NULL."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def decode_json(value: Any) -> Any:
    """
    Decode a structured column value.

    Args:
        value: Raw column value; text, bytes or an already-parsed object

    Returns:
        Parsed value when ``value`` is JSON text, ``value`` itself otherwise.
        Text that is not valid JSON is returned unchanged.
    """
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value


def encode_id(value: Any) -> str:
    if value is None or value == "":
        return str(uuid4())
    return str(value)


def decode_id(value: Any) -> Optional[str]:
    """Ids are opaque strings, including rows whose column is still INT."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return str(value)


def encode_timestamp(value: Any) -> Optional[str]:
    """
    Normalize a timestamp to the database text form ``YYYY-MM-DD HH:MM:SS``.

    Accepts datetimes and ISO-8601 strings (``Z`` suffix, offsets and
    fractional seconds included). Aware values are converted to UTC.
    Invalid or missing values give ``None`` instead of failing the write.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed.strftime(TIMESTAMP_FORMAT)


def decode_timestamp(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    if value is None:
        return None
    return str(value)


def decode_keywords(value: Any) -> List[str]:
    """
    Decode the SEO keyword column.

    New rows hold a JSON array; rows written by older versions hold a
    comma-separated string. A leading ``[`` selects the JSON path.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    text = str(value).strip()
    if not text:
        return []
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return parsed
    return [part.strip() for part in text.split(",") if part.strip()]


def encode_keywords(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        value = decode_keywords(value)
    return json.dumps(list(value), ensure_ascii=False)


# ---------------------------------------------------------------------------
# Collection rows
# ---------------------------------------------------------------------------

def structured_columns(domain: Domain) -> List[str]:
    return [column.name for column in domain.table.columns if isinstance(column.type, JSONText)]


def encode_row(domain: Domain, item: Mapping[str, Any], position: Optional[int] = None) -> Dict[str, Any]:
    """
    Build the column values for one collection item.

    Args:
        domain: Collection the item belongs to
        item: Item as sent by the site
        position: Index of the item in the submitted collection

    Returns:
        Dict keyed by column name, covering every column of the table.
        Keys the table does not know are dropped.
    """
    structured = set(structured_columns(domain))
    row: Dict[str, Any] = {}
    for column in domain.table.columns:
        name = column.name
        if name == "id":
            row[name] = encode_id(item.get("id"))
        elif name == SORT_COLUMN:
            row[name] = position
        elif name == CREATED_AT_COLUMN:
            row[name] = encode_timestamp(item.get(CREATED_AT_KEY, item.get(CREATED_AT_COLUMN)))
        elif name in structured:
            row[name] = encode_json(item.get(name))
        else:
            row[name] = item.get(name)
    return row


def decode_row(domain: Domain, row: Mapping[str, Any]) -> Dict[str, Any]:
    """Rebuild a collection item from its stored row."""
    structured = set(structured_columns(domain))
    item: Dict[str, Any] = {}
    for name, value in row.items():
        if name == "id":
            item["id"] = decode_id(value)
        elif name == SORT_COLUMN:
            continue
        elif name == CREATED_AT_COLUMN:
            item[CREATED_AT_KEY] = decode_timestamp(value)
        elif name in structured:
            item[name] = decode_json(value)
        else:
            item[name] = value
    if CREATED_AT_KEY not in item:
        item[CREATED_AT_KEY] = None
    return item


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

def default_page() -> Dict[str, Any]:
    return {"title": "", "lastUpdated": "", "sections": []}


def encode_page(key: str, page: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": key,
        "title": page.get("title"),
        "lastUpdated": page.get("lastUpdated"),
        "sections": encode_json(page.get("sections", [])),
    }


def decode_page(row: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if row is None:
        return default_page()
    sections = decode_json(row.get("sections"))
    return {
        "title": row.get("title") or "",
        "lastUpdated": row.get("lastUpdated") or "",
        "sections": [] if sections is None else sections,
    }


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def default_settings() -> Dict[str, Any]:
    """Settings shape with every sub-key present and empty."""
    result: Dict[str, Any] = {"branding": {}, "seo": {}}
    for group, key, _column in SETTINGS_SCALARS:
        result[group][key] = ""
    result["seo"]["defaultKeywords"] = []
    for key, _column, factory in SETTINGS_STRUCTURED:
        result[key] = factory()
    return result


def encode_settings(settings_obj: Mapping[str, Any], updated_at: Optional[str] = None) -> Dict[str, Any]:
    """
    Flatten a settings object into the ``main_settings`` row.

    Missing sub-objects are stored as NULL and come back as defaults.
    """
    row: Dict[str, Any] = {"id": MAIN_SETTINGS_ID}
    for group, key, column in SETTINGS_SCALARS:
        row[column] = (settings_obj.get(group) or {}).get(key)
    row[KEYWORDS_COLUMN] = encode_keywords((settings_obj.get("seo") or {}).get("defaultKeywords"))
    for key, column, _factory in SETTINGS_STRUCTURED:
        row[column] = encode_json(settings_obj.get(key))
    row["updated_at"] = updated_at
    return row


def decode_settings(row: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Rebuild the settings object; an absent row yields ``default_settings()``."""
    result = default_settings()
    if row is None:
        return result

    for group, key, column in SETTINGS_SCALARS:
        value = row.get(column)
        if value is not None:
            result[group][key] = value
    result["seo"]["defaultKeywords"] = decode_keywords(row.get(KEYWORDS_COLUMN))
    for key, column, factory in SETTINGS_STRUCTURED:
        value = decode_json(row.get(column))
        result[key] = factory() if value is None or value == "" else value
    return result
