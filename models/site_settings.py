from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
import sqlalchemy as sa

from models.types import JSONText, LongText, Timestamp

MAIN_SETTINGS_ID = "main_settings"


class SiteSettings(SQLModel, table=True):
    """
    Site-wide settings, one row keyed by ``main_settings``.

    Branding and SEO are flattened into scalar columns; the remaining
    sub-objects (theme, hero, sections, ...) are stored as JSON.
    """

    __tablename__ = "settings"

    id: str = Field(sa_column=sa.Column(sa.String(50), primary_key=True))

    # Branding
    site_name: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    site_tagline: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    logo_url: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    favicon_url: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    copyright_text: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    powered_by_text: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))

    # SEO
    seo_title: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(255)))
    seo_description: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))
    seo_keywords: Optional[str] = Field(default=None, sa_column=sa.Column(sa.Text))  # JSON array or legacy CSV
    og_image: Optional[str] = Field(default=None, sa_column=sa.Column(LongText))
    twitter_handle: Optional[str] = Field(default=None, sa_column=sa.Column(sa.String(100)))

    social_links: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    theme: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    backgrounds: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    homepage_sections: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    hero: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    cta: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    news_section: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))
    custom_sections: Optional[str] = Field(default=None, sa_column=sa.Column(JSONText))

    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=sa.Column(Timestamp(), nullable=True, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
