# src/quoteboard/core/errors.py
"""Service-layer exceptions.

Services raise these; the API layer translates them into HTTP responses.
"""

from __future__ import annotations


class QuoteboardError(Exception):
    """Base class for all service-layer failures."""


class StoreUnavailableError(QuoteboardError):
    """Raised when the backing store cannot be reached or times out."""


class ProfileNotFoundError(QuoteboardError):
    """Raised when a logged-in account has no linked author profile."""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Author profile not found for account {account_id}")
        self.account_id = account_id


class QuoteNotFoundError(QuoteboardError):
    """Raised when a quote does not exist or is not visible."""

    def __init__(self, quote_id: str) -> None:
        super().__init__(f"Quote {quote_id} not found")
        self.quote_id = quote_id


class CommentNotFoundError(QuoteboardError):
    """Raised when a comment does not exist."""


class AuthorNotFoundError(QuoteboardError):
    """Raised when an author profile does not exist."""
