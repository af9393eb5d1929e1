# src/quoteboard/api/v1/endpoints/quotes.py
"""Quote-related endpoints for the Quoteboard API."""

from fastapi import APIRouter, HTTPException, status

from quoteboard.api.v1.dependencies import AuthenticatedViewerDep, SessionDep, http_error
from quoteboard.core.errors import QuoteboardError
from quoteboard.core.settings import settings
from quoteboard.schemas.comment import CommentCreate, CommentResponse
from quoteboard.schemas.quote import QuoteCreate, QuoteResponse, ShareLinksResponse
from quoteboard.services import short_code
from quoteboard.services.comments import CommentService
from quoteboard.services.quotes import QuoteService
from quoteboard.services.sharing import share_links, share_text, share_title

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
async def create_quote(
    quote_data: QuoteCreate,
    viewer: AuthenticatedViewerDep,
    db: SessionDep,
) -> QuoteResponse:
    """Submit a quote. It stays out of the feed until a moderator approves it."""
    try:
        quote = QuoteService(db).submit(viewer, quote_data.content, quote_data.notes)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return QuoteResponse.model_validate(quote)


@router.get("/code/{code}", response_model=QuoteResponse)
async def get_quote_by_code(code: str, db: SessionDep) -> QuoteResponse:
    """Resolve a public permalink code to its quote."""
    try:
        quote = QuoteService(db).resolve_code(code)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quote not found")
    return QuoteResponse.model_validate(quote)


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(quote_id: str, db: SessionDep) -> QuoteResponse:
    try:
        quote = QuoteService(db).get_visible(quote_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return QuoteResponse.model_validate(quote)


@router.get("/{quote_id}/share-links", response_model=ShareLinksResponse)
async def get_share_links(quote_id: str, db: SessionDep) -> ShareLinksResponse:
    """Return the permalink and per-platform share URLs of a quote."""
    try:
        quote = QuoteService(db).get_visible(quote_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return ShareLinksResponse(
        quote_id=quote.id,
        code=short_code.encode(quote.id),
        title=share_title(quote),
        permalink=short_code.permalink(quote.id, settings.public_base_url),
        text=share_text(quote),
        links=share_links(quote, settings.public_base_url),
    )


@router.get("/{quote_id}/comments", response_model=list[CommentResponse])
async def list_comments(quote_id: str, db: SessionDep) -> list[CommentResponse]:
    """List approved comments on a quote, oldest first."""
    try:
        comments = CommentService(db).list_approved(quote_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return [CommentResponse.model_validate(comment) for comment in comments]


@router.post(
    "/{quote_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    quote_id: str,
    comment_data: CommentCreate,
    viewer: AuthenticatedViewerDep,
    db: SessionDep,
) -> CommentResponse:
    """Submit a comment; it is hidden until approved."""
    try:
        comment = CommentService(db).submit(quote_id, viewer, comment_data.content)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return CommentResponse.model_validate(comment)


@router.get("/{quote_id}/comments/count")
async def count_comments(quote_id: str, db: SessionDep) -> dict[str, object]:
    """Return the number of approved comments on a quote."""
    service = CommentService(db)
    try:
        QuoteService(db).get_visible(quote_id)
        count = service.count_approved(quote_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return {"quote_id": quote_id, "count": count}
