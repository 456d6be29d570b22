from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import created_at_column, sort_order_column


class FAQ(SQLModel, table=True):
    __tablename__ = "faq"

    id: str = Field(sa_column=sa.Column(sa.String(36), primary_key=True))
    question: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    answer: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    sort_order: Optional[int] = Field(default=None, sa_column=sort_order_column())
    created_at: Optional[datetime] = Field(default=None, sa_column=created_at_column())
