"""
Content service.

Entry point for reading and saving the site content tree. A save is always
followed by a fresh read, so callers get the stored state (ids, defaults,
timestamps) rather than an echo of what they sent.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.engine import Engine

from repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)


class ContentService:
    """
    Public content service.

    Usage:
        service = ContentService(get_engine())
        tree = service.get_content()
        tree = service.save_content({"news": [...], "classes": []})
    """

    def __init__(self, engine: Engine, max_workers: Optional[int] = None):
        self.repository = ContentRepository(engine, max_workers=max_workers)

    def get_content(self) -> Dict[str, Any]:
        """Return the full content tree. Raises ContentReadError on failure."""
        return self.repository.fetch_all()

    def save_content(self, content: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Save a content tree and return the stored result.

        Args:
            content: Full or partial content tree

        Returns:
            Content tree as read back after the commit

        Raises:
            ContentWriteError: If the save failed (nothing was committed)
            ContentReadError: If the save committed but the read-back failed
        """
        self.repository.save_all(content)
        return self.repository.fetch_all()

    def is_empty(self) -> bool:
        """True when no collection holds any row and no legal page was saved."""
        tree = self.get_content()
        has_rows = any(isinstance(value, list) and value for value in tree.values())
        has_pages = any(tree[key]["title"] for key in ("privacy", "terms"))
        return not has_rows and not has_pages
