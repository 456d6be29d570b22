from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import JSONText, LongText, created_at_column, sort_order_column


class GameClass(SQLModel, table=True):
    """Playable class with its detail bullets, devices and specialization trees."""

    __tablename__ = "classes"

    id: str = Field(sa_column=sa.Column(sa.String(36), primary_key=True))
    name: str = Field(sa_column=sa.Column(sa.String(100), nullable=False))
    role: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    details: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    image: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    icon: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    color: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    devices: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    devicesUsedTitle: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    specializations: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    sort_order: Optional[int] = Field(default=None, sa_column=sort_order_column())
    created_at: Optional[datetime] = Field(default=None, sa_column=created_at_column())
