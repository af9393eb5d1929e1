# src/quoteboard/services/site_config.py
"""Typed view over the loose ``site_setting`` key/value rows.

Rows are read once and converted into :class:`SiteConfig`; every field has an
explicit default, and a value that cannot be parsed falls back to it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from threading import Lock
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy import select
from sqlalchemy.orm import Session

from quoteboard.models import SiteSetting
from quoteboard.repositories.base import store_call

logger = logging.getLogger(__name__)

# Row key -> SiteConfig field
SETTING_KEYS: Final[dict[str, str]] = {
    "ads_enabled": "ads_enabled",
    "ads_frequency": "ads_frequency",
    "google_adsense_client": "adsense_client",
    "google_adsense_slot": "adsense_slot",
}


class SiteConfig(BaseModel):
    """Site-wide advertising configuration."""

    ads_enabled: bool = False
    ads_frequency: int = Field(default=3, description="Ad after every N feed items; 0 disables")
    adsense_client: str = ""
    adsense_slot: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("ads_frequency")
    @classmethod
    def _clamp_frequency(cls, value: int) -> int:
        return max(0, value)

    @field_validator("adsense_client", "adsense_slot", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_rows(cls, rows: Mapping[str, str]) -> SiteConfig:
        """Build a config from raw rows, skipping values that do not parse."""
        values: dict[str, object] = {}
        for key, field_name in SETTING_KEYS.items():
            if key not in rows:
                continue
            raw = rows[key].strip() if isinstance(rows[key], str) else rows[key]
            try:
                cls.model_validate({field_name: raw})
            except ValidationError:
                logger.warning("Ignoring unparsable site setting %s=%r", key, rows[key])
                continue
            values[field_name] = raw
        return cls.model_validate(values)


def load_site_config(session: Session) -> SiteConfig:
    """Read all setting rows and return the typed config."""
    with store_call("load site settings"):
        rows = session.execute(select(SiteSetting.key, SiteSetting.value)).all()
    return SiteConfig.from_rows({row.key: row.value for row in rows})


class SiteConfigProvider:
    """Loads the site config on first use and serves the cached copy after."""

    def __init__(self) -> None:
        self._config: SiteConfig | None = None
        self._lock = Lock()

    def get(self, session: Session) -> SiteConfig:
        with self._lock:
            if self._config is None:
                self._config = load_site_config(session)
            return self._config

    def invalidate(self) -> None:
        """Drop the cached config so the next read reloads it."""
        with self._lock:
            self._config = None


site_config_provider = SiteConfigProvider()
