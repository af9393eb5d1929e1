# src/quoteboard/api/v1/endpoints/feed.py
"""Feed endpoints for the Quoteboard API."""

from typing import Annotated

from fastapi import APIRouter, Query

from quoteboard.api.v1.dependencies import SessionDep, SiteConfigDep, http_error
from quoteboard.core.errors import QuoteboardError
from quoteboard.core.settings import settings
from quoteboard.repositories.quote_repo import QuoteRepository
from quoteboard.schemas.feed import FeedPageResponse
from quoteboard.schemas.quote import QuoteResponse
from quoteboard.services.ads import place_ads
from quoteboard.services.feed import FeedAssembler, normalize_term
from quoteboard.services.quotes import QuoteService

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("/", response_model=FeedPageResponse)
async def get_feed(
    db: SessionDep,
    site_config: SiteConfigDep,
    q: Annotated[str, Query(max_length=200, description="Search term")] = "",
    page: Annotated[int, Query(ge=0)] = 0,
    page_size: Annotated[int | None, Query(ge=1, le=settings.feed_max_page_size)] = None,
) -> FeedPageResponse:
    """Return one page of visible quotes, newest first.

    A non-empty ``q`` restricts the page to quotes whose content or author
    name contains it (case-insensitive). ``ad_positions`` lists the item
    indices after which the client renders an ad placeholder.
    """
    size = page_size or settings.feed_page_size
    assembler = FeedAssembler(QuoteRepository(db))
    try:
        feed_page = assembler.fetch_page(q, page, size)
    except QuoteboardError as exc:
        raise http_error(exc) from exc

    ad_positions = (
        place_ads(feed_page.items, site_config.ads_frequency) if site_config.ads_enabled else []
    )
    return FeedPageResponse(
        items=[QuoteResponse.model_validate(quote) for quote in feed_page.items],
        has_more=feed_page.has_more,
        page=page,
        page_size=size,
        search_term=normalize_term(q),
        ad_positions=ad_positions,
    )


@router.get("/popular", response_model=list[QuoteResponse])
async def get_popular_quotes(
    db: SessionDep,
    limit: Annotated[int | None, Query(ge=1, le=50)] = None,
) -> list[QuoteResponse]:
    """Return the most viewed visible quotes."""
    try:
        quotes = QuoteService(db).popular(limit or settings.popular_quotes_limit)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return [QuoteResponse.model_validate(quote) for quote in quotes]
