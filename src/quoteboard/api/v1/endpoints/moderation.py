# src/quoteboard/api/v1/endpoints/moderation.py
"""Moderation endpoints for the Quoteboard API.

Every route requires an account listed in ``ADMIN_ACCOUNT_IDS``.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from quoteboard.api.v1.dependencies import AdminDep, SessionDep, http_error
from quoteboard.core.errors import QuoteboardError
from quoteboard.schemas.comment import CommentResponse
from quoteboard.schemas.moderation import ModerationQueueResponse, ModerationTotalsResponse
from quoteboard.schemas.quote import QuoteResponse
from quoteboard.services.moderation import ModerationService

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.get("/pending", response_model=ModerationQueueResponse)
async def get_pending(admin: AdminDep, db: SessionDep) -> ModerationQueueResponse:
    """Return quotes and comments waiting for review, with dashboard totals."""
    service = ModerationService(db)
    try:
        quotes = service.pending_quotes()
        comments = service.pending_comments()
        totals = service.totals()
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return ModerationQueueResponse(
        quotes=[QuoteResponse.model_validate(quote) for quote in quotes],
        comments=[CommentResponse.model_validate(comment) for comment in comments],
        totals=ModerationTotalsResponse(
            total_authors=totals.total_authors,
            total_quotes=totals.total_quotes,
            total_comments=totals.total_comments,
            pending_quotes=totals.pending_quotes,
            pending_comments=totals.pending_comments,
        ),
    )


@router.post("/quotes/{quote_id}/approve", response_model=QuoteResponse)
async def approve_quote(quote_id: str, admin: AdminDep, db: SessionDep) -> QuoteResponse:
    try:
        quote = ModerationService(db).approve_quote(quote_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return QuoteResponse.model_validate(quote)


@router.post("/quotes/{quote_id}/reject", response_model=QuoteResponse)
async def reject_quote(quote_id: str, admin: AdminDep, db: SessionDep) -> QuoteResponse:
    """Soft-delete a quote."""
    try:
        quote = ModerationService(db).reject_quote(quote_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return QuoteResponse.model_validate(quote)


@router.post("/comments/{comment_id}/approve", response_model=CommentResponse)
async def approve_comment(comment_id: str, admin: AdminDep, db: SessionDep) -> CommentResponse:
    try:
        comment = ModerationService(db).approve_comment(comment_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return CommentResponse.model_validate(comment)


@router.post("/authors/{author_id}/toggle-active")
async def toggle_author_active(author_id: str, admin: AdminDep, db: SessionDep) -> dict[str, Any]:
    """Activate or deactivate an author profile."""
    try:
        author = ModerationService(db).toggle_author_active(author_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return {"author_id": author.id, "is_active": author.is_active}
