# tests/v1/test_system_endpoints.py
"""Tests for system and liveness endpoints."""

from fastapi import status

from quoteboard.models import SiteSetting


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root(client) -> None:
    body = client.get("/").json()

    assert body["name"] == "Quoteboard"
    assert body["docs"] == "/docs"


def test_public_config(client, db_session) -> None:
    db_session.add_all(
        [
            SiteSetting(key="ads_enabled", value="true"),
            SiteSetting(key="ads_frequency", value="bogus"),
            SiteSetting(key="google_adsense_client", value="ca-pub-1"),
        ]
    )
    db_session.flush()

    response = client.get("/api/v1/system/config")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["ads"] == {
        "ads_enabled": True,
        "ads_frequency": 3,
        "adsense_client": "ca-pub-1",
        "adsense_slot": "",
    }
    assert body["feed"]["page_size"] == 10
    assert "secret_key" not in str(body)
