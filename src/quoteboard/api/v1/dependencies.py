"""Shared API dependencies for viewer identity and common functionality."""

from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from quoteboard.core.errors import (
    AuthorNotFoundError,
    CommentNotFoundError,
    ProfileNotFoundError,
    QuoteboardError,
    QuoteNotFoundError,
    StoreUnavailableError,
)
from quoteboard.core.security import decode_account_id
from quoteboard.core.settings import settings
from quoteboard.db.session import SessionLocal, get_db
from quoteboard.services.engagement import EngagementStore
from quoteboard.services.like_store import KeyValueStore, get_device_store
from quoteboard.services.site_config import SiteConfig, site_config_provider
from quoteboard.services.view_tracker import ViewTrackerRegistry
from quoteboard.services.viewer import (
    AnonymousViewer,
    AuthenticatedViewer,
    Viewer,
    resolve_authenticated_viewer,
)

# Bearer is optional: anonymous viewers identify with a device id instead
bearer_scheme = HTTPBearer(auto_error=False)

DEVICE_HEADER = "X-Device-Id"

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

SessionFactory = Callable[[], AbstractContextManager[Session]]

view_tracker_registry = ViewTrackerRegistry()


def http_error(exc: QuoteboardError) -> HTTPException:
    """Translate a service-layer error into the matching HTTP error."""
    if isinstance(exc, StoreUnavailableError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Store temporarily unavailable",
        )
    if isinstance(exc, ProfileNotFoundError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Author profile not found",
        )
    if isinstance(exc, QuoteNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quote not found")
    if isinstance(exc, CommentNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    if isinstance(exc, AuthorNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Author not found")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def get_account_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Return the account named by the bearer token, if one was sent.

    Raises:
        HTTPException: If a token was sent but does not validate
    """
    if credentials is None:
        return None
    account_id = decode_account_id(credentials.credentials)
    if account_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return account_id


AccountIdDep = Annotated[str | None, Depends(get_account_id)]


def get_device_id(
    x_device_id: Annotated[str | None, Header(alias=DEVICE_HEADER, max_length=128)] = None,
) -> str | None:
    if x_device_id is None:
        return None
    device_id = x_device_id.strip()
    return device_id or None


DeviceIdDep = Annotated[str | None, Depends(get_device_id)]


def get_optional_viewer(
    db: SessionDep,
    account_id: AccountIdDep,
    device_id: DeviceIdDep,
) -> Viewer | None:
    """Resolve the viewer of a request.

    A logged-in account must have an author profile; it never degrades to an
    anonymous identity. Requests without a token are anonymous when they carry
    a device id, and unidentified otherwise.

    Raises:
        HTTPException: 403 if the account has no author profile
    """
    if account_id is not None:
        try:
            return resolve_authenticated_viewer(db, account_id)
        except QuoteboardError as exc:
            raise http_error(exc) from exc
    if device_id is not None:
        return AnonymousViewer(device_id=device_id)
    return None


OptionalViewerDep = Annotated[Viewer | None, Depends(get_optional_viewer)]


def get_viewer(viewer: OptionalViewerDep) -> Viewer:
    """Require some identity, authenticated or anonymous."""
    if viewer is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Bearer token or {DEVICE_HEADER} header required",
        )
    return viewer


ViewerDep = Annotated[Viewer, Depends(get_viewer)]


def get_authenticated_viewer(viewer: OptionalViewerDep) -> AuthenticatedViewer:
    """Require a logged-in viewer with an author profile."""
    if not isinstance(viewer, AuthenticatedViewer):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return viewer


AuthenticatedViewerDep = Annotated[AuthenticatedViewer, Depends(get_authenticated_viewer)]


def require_admin(account_id: AccountIdDep) -> str:
    """Allow only accounts listed in ``ADMIN_ACCOUNT_IDS``."""
    if account_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    if account_id not in settings.admin_account_ids:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return account_id


AdminDep = Annotated[str, Depends(require_admin)]


def get_device_store_dep(device_id: DeviceIdDep) -> KeyValueStore | None:
    """Return the like store of the requesting device, if it sent an id."""
    if device_id is None:
        return None
    return get_device_store(device_id)


DeviceStoreDep = Annotated[KeyValueStore | None, Depends(get_device_store_dep)]


def get_engagement_store(db: SessionDep, device_store: DeviceStoreDep) -> EngagementStore:
    return EngagementStore(db, device_store=device_store)


EngagementStoreDep = Annotated[EngagementStore, Depends(get_engagement_store)]


def get_site_config(db: SessionDep) -> SiteConfig:
    """Return the cached typed site configuration."""
    try:
        return site_config_provider.get(db)
    except QuoteboardError as exc:
        raise http_error(exc) from exc


SiteConfigDep = Annotated[SiteConfig, Depends(get_site_config)]


def get_session_factory() -> SessionFactory:
    """Return the factory used by work that outlives the request session."""
    return SessionLocal


SessionFactoryDep = Annotated[SessionFactory, Depends(get_session_factory)]


def get_view_tracker_registry() -> ViewTrackerRegistry:
    return view_tracker_registry


ViewTrackerRegistryDep = Annotated[ViewTrackerRegistry, Depends(get_view_tracker_registry)]


def get_view_delay() -> float:
    """Seconds an item must stay mounted before its impression counts."""
    return settings.view_delay_seconds


ViewDelayDep = Annotated[float, Depends(get_view_delay)]
