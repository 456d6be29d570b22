from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import created_at_column


class User(SQLModel, table=True):
    """Admin account. Only the bcrypt hash of the password is stored."""

    __tablename__ = "users"

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        sa_column=sa.Column(sa.String(36), primary_key=True),
    )
    username: str = Field(sa_column=sa.Column(sa.String(50), nullable=False, unique=True))
    password_hash: str = Field(sa_column=sa.Column(sa.String(255), nullable=False))
    role: str = Field(
        default="admin",
        sa_column=sa.Column(sa.String(20), nullable=False, server_default="admin"),
    )
    created_at: Optional[datetime] = Field(default_factory=datetime.utcnow, sa_column=created_at_column())
