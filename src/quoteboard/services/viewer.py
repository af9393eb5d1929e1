# src/quoteboard/services/viewer.py
"""Viewer identities used by the engagement services."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from quoteboard.core.errors import ProfileNotFoundError
from quoteboard.repositories.author_repo import AuthorRepository


@dataclass(frozen=True)
class AuthenticatedViewer:
    """Logged-in viewer, identified by the author profile linked to the account."""

    author_id: str
    account_id: str | None = None


@dataclass(frozen=True)
class AnonymousViewer:
    """Viewer without an account; likes are kept in a device-local store."""

    device_id: str


Viewer = AuthenticatedViewer | AnonymousViewer


def resolve_authenticated_viewer(session: Session, account_id: str) -> AuthenticatedViewer:
    """Map a login account to its author profile.

    Raises:
        ProfileNotFoundError: If no author profile is linked to the account.
            Callers must surface this instead of falling back to an anonymous
            identity.
    """
    author = AuthorRepository(session).get_by_account(account_id)
    if author is None:
        raise ProfileNotFoundError(account_id)
    return AuthenticatedViewer(author_id=author.id, account_id=account_id)


def viewer_author_id(viewer: Viewer | None) -> str | None:
    """Return the author id to attribute an event to, if any."""
    if isinstance(viewer, AuthenticatedViewer):
        return viewer.author_id
    return None
