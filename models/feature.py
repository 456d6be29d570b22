from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import JSONText, LongText, created_at_column, sort_order_column


class Feature(SQLModel, table=True):
    """Game feature card with its list of devices."""

    __tablename__ = "features"

    id: str = Field(sa_column=sa.Column(sa.String(36), primary_key=True))
    title: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    image: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    icon: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    devices: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    devicesSectionTitle: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    sort_order: Optional[int] = Field(default=None, sa_column=sort_order_column())
    created_at: Optional[datetime] = Field(default=None, sa_column=created_at_column())
