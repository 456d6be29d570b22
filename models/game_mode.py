from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import JSONText, LongText, created_at_column, sort_order_column


class GameMode(SQLModel, table=True):
    __tablename__ = "game_modes"

    id: str = Field(sa_column=sa.Column(sa.String(36), primary_key=True))
    name: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))
    shortName: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(50)))
    description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    rules: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    image: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    media: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    playerCount: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(50)))
    roundTime: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(50)))
    sort_order: Optional[int] = Field(default=None, sa_column=sort_order_column())
    created_at: Optional[datetime] = Field(default=None, sa_column=created_at_column())
