# src/quoteboard/api/v1/endpoints/engagement.py
"""Like, view and share endpoints for the Quoteboard API."""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from quoteboard.api.v1.dependencies import (
    EngagementStoreDep,
    OptionalViewerDep,
    SessionFactory,
    SessionFactoryDep,
    ViewDelayDep,
    ViewerDep,
    ViewTrackerRegistryDep,
    http_error,
)
from quoteboard.core.errors import QuoteboardError
from quoteboard.core.settings import settings
from quoteboard.schemas.engagement import (
    ImpressionResponse,
    LikeStateResponse,
    ShareCreate,
    ShareResponse,
    ViewResponse,
)
from quoteboard.services import short_code
from quoteboard.services.engagement import EngagementStore
from quoteboard.services.quotes import QuoteService
from quoteboard.services.sharing import share_links
from quoteboard.services.viewer import Viewer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["engagement"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def _register_view_job(
    session_factory: SessionFactory,
    quote_id: str,
    viewer: Viewer | None,
    viewer_ip: str | None,
) -> int:
    with session_factory() as session:
        return EngagementStore(session).register_view(quote_id, viewer, viewer_ip)


@router.get("/quotes/{quote_id}/like", response_model=LikeStateResponse)
async def get_like_state(
    quote_id: str,
    viewer: OptionalViewerDep,
    store: EngagementStoreDep,
) -> LikeStateResponse:
    """Return whether the viewer liked the quote, plus the current count."""
    try:
        quote = QuoteService(store.session).get_visible(quote_id)
        liked = store.has_reacted(quote_id, viewer)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return LikeStateResponse(quote_id=quote_id, liked=liked, likes_count=quote.likes_count)


@router.post("/quotes/{quote_id}/like", response_model=LikeStateResponse)
async def toggle_like(
    quote_id: str,
    viewer: ViewerDep,
    store: EngagementStoreDep,
) -> LikeStateResponse:
    """Flip the viewer's like on the quote."""
    try:
        result = store.toggle_like(quote_id, viewer)
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return LikeStateResponse(quote_id=quote_id, liked=result.liked, likes_count=result.likes_count)


@router.post("/quotes/{quote_id}/views", response_model=ViewResponse)
async def register_view(
    quote_id: str,
    request: Request,
    viewer: OptionalViewerDep,
    store: EngagementStoreDep,
) -> ViewResponse:
    """Count one impression right away."""
    try:
        views = store.register_view(quote_id, viewer, _client_ip(request))
    except QuoteboardError as exc:
        raise http_error(exc) from exc
    return ViewResponse(quote_id=quote_id, views_count=views)


@router.post(
    "/quotes/{quote_id}/impressions",
    response_model=ImpressionResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def arm_impression(
    quote_id: str,
    request: Request,
    viewer: OptionalViewerDep,
    store: EngagementStoreDep,
    registry: ViewTrackerRegistryDep,
    session_factory: SessionFactoryDep,
    delay: ViewDelayDep,
) -> ImpressionResponse:
    """Arm a deferred impression for a mounted feed item.

    The view is counted once ``delay_ms`` elapsed unless the client cancels
    the returned token first.
    """
    try:
        QuoteService(store.session).get_visible(quote_id)
    except QuoteboardError as exc:
        raise http_error(exc) from exc

    viewer_ip = _client_ip(request)

    async def _fire() -> int:
        return await asyncio.to_thread(
            _register_view_job, session_factory, quote_id, viewer, viewer_ip
        )

    token = registry.arm(_fire, delay)
    logger.debug("Impression %s armed for quote %s", token, quote_id)
    return ImpressionResponse(token=token, delay_ms=int(delay * 1000))


@router.delete("/impressions/{token}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_impression(token: str, registry: ViewTrackerRegistryDep) -> Response:
    """Cancel a pending impression; 404 if it is unknown or already counted."""
    if not registry.cancel(token):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Impression not pending",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/quotes/{quote_id}/shares", response_model=ShareResponse)
async def register_share(
    quote_id: str,
    share_data: ShareCreate,
    viewer: OptionalViewerDep,
    store: EngagementStoreDep,
) -> ShareResponse:
    """Record a share and return the URL to open for the platform."""
    try:
        shares = store.register_share(quote_id, share_data.platform, viewer)
        quote = QuoteService(store.session).get_visible(quote_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except QuoteboardError as exc:
        raise http_error(exc) from exc

    links = share_links(quote, settings.public_base_url)
    url = links.get(share_data.platform)
    if url is None:
        url = short_code.permalink(quote.id, settings.public_base_url)
    return ShareResponse(quote_id=quote_id, shares_count=shares, url=url)
