from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import LongText, created_at_column, sort_order_column


class News(SQLModel, table=True):
    """News article shown on the home page and the news listing."""

    __tablename__ = "news"

    id: str = Field(sa_column=sa.Column(sa.String(36), primary_key=True))
    title: str = Field(sa_column=sa.Column(sa.String(255), nullable=False))
    date: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    content: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    image: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    tag: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    sort_order: Optional[int] = Field(default=None, sa_column=sort_order_column())
    created_at: Optional[datetime] = Field(default=None, sa_column=created_at_column())
