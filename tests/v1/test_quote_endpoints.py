# tests/v1/test_quote_endpoints.py
"""Tests for quote, comment and author endpoints."""

from fastapi import status

from quoteboard.core.security import create_access_token
from quoteboard.services import short_code


def test_get_quote_by_code(client, test_quote) -> None:
    code = short_code.encode(test_quote.id)

    response = client.get(f"/api/v1/quotes/code/{code}")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == test_quote.id
    assert body["code"] == code
    assert body["author"]["name"] == "Ada Lovelace"


def test_unknown_code_is_not_found(client, test_quote) -> None:
    code = "00000" if short_code.encode(test_quote.id) != "00000" else "00001"

    assert client.get(f"/api/v1/quotes/code/{code}").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/quotes/code/abc").status_code == status.HTTP_404_NOT_FOUND


def test_get_quote(client, test_quote, make_quote) -> None:
    hidden = make_quote("Pending quote text", approved=False)

    assert client.get(f"/api/v1/quotes/{test_quote.id}").status_code == status.HTTP_200_OK
    assert client.get(f"/api/v1/quotes/{hidden.id}").status_code == status.HTTP_404_NOT_FOUND


def test_share_links(client, test_quote) -> None:
    response = client.get(f"/api/v1/quotes/{test_quote.id}/share-links")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    code = short_code.encode(test_quote.id)
    assert body["code"] == code
    assert body["title"] == f"Quote #{code}"
    assert body["permalink"].endswith(f"/quote/{code}")
    assert body["links"]["copy"] == body["permalink"]


def test_create_quote(client, auth_headers) -> None:
    response = client.post(
        "/api/v1/quotes/",
        json={"content": "Simplicity is the ultimate sophistication", "notes": "da Vinci"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["is_approved"] is False
    assert body["author"]["name"] == "Ada Lovelace"
    assert client.get(f"/api/v1/quotes/{body['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_create_quote_too_short(client, auth_headers) -> None:
    response = client.post("/api/v1/quotes/", json={"content": "tiny"}, headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_quote_requires_login(client, device_headers) -> None:
    response = client.post(
        "/api/v1/quotes/",
        json={"content": "Anonymous quotes are not accepted"},
        headers=device_headers,
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_account_without_profile_is_forbidden(client, test_quote) -> None:
    headers = {"Authorization": f"Bearer {create_access_token('account-without-profile')}"}

    response = client.post(f"/api/v1/quotes/{test_quote.id}/like", headers=headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Author profile not found"


def test_invalid_token(client, test_quote) -> None:
    response = client.post(
        f"/api/v1/quotes/{test_quote.id}/like",
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_comments_flow(client, test_quote, auth_headers, admin_headers) -> None:
    created = client.post(
        f"/api/v1/quotes/{test_quote.id}/comments",
        json={"content": "Beautifully put"},
        headers=auth_headers,
    )
    assert created.status_code == status.HTTP_201_CREATED
    comment_id = created.json()["id"]
    assert client.get(f"/api/v1/quotes/{test_quote.id}/comments").json() == []

    approved = client.post(
        f"/api/v1/moderation/comments/{comment_id}/approve",
        headers=admin_headers,
    )
    assert approved.status_code == status.HTTP_200_OK

    listed = client.get(f"/api/v1/quotes/{test_quote.id}/comments").json()
    assert [comment["id"] for comment in listed] == [comment_id]
    count = client.get(f"/api/v1/quotes/{test_quote.id}/comments/count").json()
    assert count == {"quote_id": test_quote.id, "count": 1}


def test_comment_validation(client, test_quote, auth_headers) -> None:
    response = client.post(
        f"/api/v1/quotes/{test_quote.id}/comments",
        json={"content": "x" * 501},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_author_stats(client, test_author, make_quote) -> None:
    make_quote("First approved quote", author=test_author, views_count=2, shares_count=5)

    response = client.get(f"/api/v1/authors/{test_author.id}/stats")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "author_id": test_author.id,
        "total_quotes": 1,
        "total_views": 2,
        "total_shares": 5,
        "total_reactions": 0,
    }
    assert client.get("/api/v1/authors/missing/stats").status_code == status.HTTP_404_NOT_FOUND
