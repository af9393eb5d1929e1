# src/quoteboard/models/site_setting.py
"""Loose key/value site settings edited from the admin screens."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quoteboard.db.session import Base


class SiteSetting(Base):
    """Raw setting row. Read through ``SiteConfig``, never directly."""

    __tablename__ = "site_setting"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
