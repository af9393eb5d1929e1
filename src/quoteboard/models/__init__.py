# src/quoteboard/models/__init__.py
"""SQLAlchemy models for the Quoteboard application."""

from .author import Author
from .comment import Comment
from .engagement import QuoteShare, QuoteView, Reaction
from .quote import Quote
from .site_setting import SiteSetting

__all__ = [
    "Author",
    "Comment",
    "Quote",
    "QuoteShare", "QuoteView", "Reaction",
    "SiteSetting",
]
