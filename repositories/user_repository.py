"""
User repository for admin accounts.

Handles CRUD for the users table. Password hashes never leave this layer:
listing returns account summaries only.
"""

from typing import Any, Dict, List, Optional
from sqlmodel import Session, select

from models.user import User
from utils.security import hash_password, verify_password


class UserRepository:
    """Repository for managing admin accounts."""

    def __init__(self, db_session: Session):
        """
        Initialize repository.

        Args:
            db_session: SQLModel database session
        """
        self.db = db_session

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.get(User, str(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        """
        Get a user by username.

        Args:
            username: Unique login name

        Returns:
            User if found, None otherwise
        """
        if not username:
            return None
        query = select(User).where(User.username == username)
        return self.db.exec(query).first()

    def list_users(self) -> List[Dict[str, Any]]:
        """Return every account without its password hash, oldest first."""
        query = select(User).order_by(User.created_at, User.username)
        return [
            {
                "id": str(user.id),
                "username": user.username,
                "role": user.role,
                "created_at": user.created_at.isoformat() if user.created_at else None,
            }
            for user in self.db.exec(query).all()
        ]

    def create_user(self, username: str, password: str, role: str = "admin") -> Optional[User]:
        """
        Create an account.

        Args:
            username: Unique login name
            password: Plain password, stored as a bcrypt hash
            role: Account role

        Returns:
            Created user, or None if the username is taken
        """
        if self.get_by_username(username):
            return None
        user = User(username=username, password_hash=hash_password(password), role=role)
        return self._save(user)

    def delete_user(self, user_id: str) -> bool:
        """
        Delete an account.

        Returns:
            True if deleted, False if not found
        """
        user = self.get_by_id(user_id)
        if not user:
            return False
        self.db.delete(user)
        self.db.commit()
        return True

    def verify_credentials(self, username: str, password: str) -> Optional[User]:
        """Return the user when ``password`` matches, None otherwise."""
        user = self.get_by_username(username)
        if user and verify_password(password, user.password_hash):
            return user
        return None

    def change_password(self, user: User, new_password: str) -> User:
        user.password_hash = hash_password(new_password)
        return self._save(user)

    def _save(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
