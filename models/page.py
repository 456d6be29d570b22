from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import JSONText


class Page(SQLModel, table=True):
    """Static legal page, keyed by a fixed id ('privacy', 'terms')."""

    __tablename__ = "pages"

    id: str = Field(sa_column=sa.Column(sa.String(50), primary_key=True))
    title: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    lastUpdated: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    sections: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
