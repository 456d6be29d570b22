"""
Repositories module - Data Access Layer.

Provides repository classes for database operations following the Repository pattern.

Usage:
    from repositories import ContentRepository, UserRepository

    # The content repository works on the engine (it reads tables concurrently)
    content_repo = ContentRepository(engine)
    tree = content_repo.fetch_all()

    # Entity repositories work on a database session
    user_repo = UserRepository(db_session)
    user = user_repo.get_by_username("admin")
"""

from repositories.content_repository import ContentRepository
from repositories.user_repository import UserRepository

__all__ = [
    "ContentRepository",
    "UserRepository",
]
