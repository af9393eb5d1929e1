# tests/v1/test_moderation_endpoints.py
"""Tests for moderation endpoints."""

from fastapi import status


def test_requires_admin(client, auth_headers) -> None:
    assert client.get("/api/v1/moderation/pending").status_code == status.HTTP_401_UNAUTHORIZED
    response = client.get("/api/v1/moderation/pending", headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_pending_queue(client, admin_headers, test_quote, make_quote) -> None:
    pending = make_quote("Awaiting a moderator", approved=False)

    response = client.get("/api/v1/moderation/pending", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert [quote["id"] for quote in body["quotes"]] == [pending.id]
    assert body["comments"] == []
    assert body["totals"]["total_quotes"] == 1
    assert body["totals"]["pending_quotes"] == 1


def test_approve_then_reject(client, admin_headers, make_quote) -> None:
    quote = make_quote("Awaiting a moderator", approved=False)

    approved = client.post(f"/api/v1/moderation/quotes/{quote.id}/approve", headers=admin_headers)
    assert approved.status_code == status.HTTP_200_OK
    assert approved.json()["is_approved"] is True
    assert client.get(f"/api/v1/quotes/{quote.id}").status_code == status.HTTP_200_OK

    rejected = client.post(f"/api/v1/moderation/quotes/{quote.id}/reject", headers=admin_headers)
    assert rejected.json()["is_active"] is False
    assert client.get(f"/api/v1/quotes/{quote.id}").status_code == status.HTTP_404_NOT_FOUND


def test_toggle_author(client, admin_headers, test_author) -> None:
    response = client.post(
        f"/api/v1/moderation/authors/{test_author.id}/toggle-active",
        headers=admin_headers,
    )

    assert response.json() == {"author_id": test_author.id, "is_active": False}


def test_unknown_targets(client, admin_headers) -> None:
    for path in (
        "/api/v1/moderation/quotes/missing/approve",
        "/api/v1/moderation/quotes/missing/reject",
        "/api/v1/moderation/comments/missing/approve",
        "/api/v1/moderation/authors/missing/toggle-active",
    ):
        assert client.post(path, headers=admin_headers).status_code == status.HTTP_404_NOT_FOUND
