from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import LongText, created_at_column, sort_order_column


class Media(SQLModel, table=True):
    """Gallery entry: image, gif or video."""

    __tablename__ = "media"

    id: str = Field(sa_column=sa.Column(sa.String(36), primary_key=True))
    type: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(20)))
    title: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    src: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    category: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    thumbnail: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    sort_order: Optional[int] = Field(default=None, sa_column=sort_order_column())
    created_at: Optional[datetime] = Field(default=None, sa_column=created_at_column())
