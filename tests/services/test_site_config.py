"""Tests for the typed site configuration."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from quoteboard.models import SiteSetting
from quoteboard.services.site_config import SiteConfig, SiteConfigProvider, load_site_config


def test_defaults_when_no_rows() -> None:
    config = SiteConfig.from_rows({})

    assert config.ads_enabled is False
    assert config.ads_frequency == 3
    assert config.adsense_client == ""
    assert config.adsense_slot == ""


def test_parses_known_rows() -> None:
    config = SiteConfig.from_rows(
        {
            "ads_enabled": "true",
            "ads_frequency": " 5 ",
            "google_adsense_client": " ca-pub-123 ",
            "google_adsense_slot": "987",
            "unrelated": "ignored",
        }
    )

    assert config.ads_enabled is True
    assert config.ads_frequency == 5
    assert config.adsense_client == "ca-pub-123"
    assert config.adsense_slot == "987"


def test_unparsable_values_fall_back(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="quoteboard.services.site_config"):
        config = SiteConfig.from_rows({"ads_enabled": "maybe", "ads_frequency": "often"})

    assert config.ads_enabled is False
    assert config.ads_frequency == 3
    assert "ads_enabled" in caplog.text
    assert "ads_frequency" in caplog.text


def test_negative_frequency_disables_ads() -> None:
    assert SiteConfig.from_rows({"ads_frequency": "-4"}).ads_frequency == 0


def test_provider_caches_until_invalidated(db_session: Session) -> None:
    db_session.add(SiteSetting(key="ads_frequency", value="4"))
    db_session.flush()
    provider = SiteConfigProvider()

    assert provider.get(db_session).ads_frequency == 4

    db_session.get(SiteSetting, "ads_frequency").value = "7"
    db_session.flush()
    assert provider.get(db_session).ads_frequency == 4

    provider.invalidate()
    assert provider.get(db_session).ads_frequency == 7


def test_load_from_store(db_session: Session) -> None:
    db_session.add_all(
        [
            SiteSetting(key="ads_enabled", value="1"),
            SiteSetting(key="google_adsense_slot", value="slot-1"),
        ]
    )
    db_session.flush()

    config = load_site_config(db_session)

    assert config.ads_enabled is True
    assert config.adsense_slot == "slot-1"
