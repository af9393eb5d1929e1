# src/quoteboard/api/v1/endpoints/authors.py
"""Author directory and profile endpoints for the Quoteboard API."""

from fastapi import APIRouter, HTTPException, status

from quoteboard.api.v1.dependencies import AuthenticatedViewerDep, SessionDep, http_error
from quoteboard.core.errors import QuoteboardError
from quoteboard.schemas.author import (
    AuthorListItem,
    AuthorResponse,
    AuthorStatsResponse,
    AuthorUpdate,
)
from quoteboard.schemas.quote import QuoteResponse
from quoteboard.services.authors import AuthorService, author_stats

router = APIRouter(prefix="/authors", tags=["authors"])


@router.get("/", response_model=list[AuthorListItem])
async def list_authors(db: SessionDep) -> list[AuthorListItem]:
    """List active authors, newest first, with their visible quote counts."""
    try:
        entries = AuthorService(db).directory()
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return [
        AuthorListItem.model_validate(entry.author).model_copy(
            update={"quotes_count": entry.quotes_count}
        )
        for entry in entries
    ]


# /me routes must precede /{author_id}
@router.get("/me", response_model=AuthorResponse)
async def get_my_profile(viewer: AuthenticatedViewerDep, db: SessionDep) -> AuthorResponse:
    try:
        author = AuthorService(db).own_profile(viewer)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return AuthorResponse.model_validate(author)


@router.patch("/me", response_model=AuthorResponse)
async def update_my_profile(
    profile_data: AuthorUpdate,
    viewer: AuthenticatedViewerDep,
    db: SessionDep,
) -> AuthorResponse:
    """Update name, bio or avatar of the logged-in author."""
    try:
        author = AuthorService(db).update_profile(
            viewer,
            name=profile_data.name,
            bio=profile_data.bio,
            avatar_url=profile_data.avatar_url,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return AuthorResponse.model_validate(author)


@router.get("/me/quotes", response_model=list[QuoteResponse])
async def list_my_quotes(viewer: AuthenticatedViewerDep, db: SessionDep) -> list[QuoteResponse]:
    """List the logged-in author's quotes, pending ones included."""
    try:
        quotes = AuthorService(db).own_quotes(viewer)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return [QuoteResponse.model_validate(quote) for quote in quotes]


@router.get("/{author_id}", response_model=AuthorResponse)
async def get_author(author_id: str, db: SessionDep) -> AuthorResponse:
    try:
        author = AuthorService(db).get_active(author_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return AuthorResponse.model_validate(author)


@router.get("/{author_id}/quotes", response_model=list[QuoteResponse])
async def list_author_quotes(author_id: str, db: SessionDep) -> list[QuoteResponse]:
    """List an active author's visible quotes, newest first."""
    try:
        quotes = AuthorService(db).public_quotes(author_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return [QuoteResponse.model_validate(quote) for quote in quotes]


@router.get("/{author_id}/stats", response_model=AuthorStatsResponse)
async def get_author_stats(author_id: str, db: SessionDep) -> AuthorStatsResponse:
    """Return totals over the author's approved quotes."""
    try:
        stats = author_stats(db, author_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return AuthorStatsResponse(
        author_id=author_id,
        total_quotes=stats.total_quotes,
        total_views=stats.total_views,
        total_shares=stats.total_shares,
        total_reactions=stats.total_reactions,
    )
