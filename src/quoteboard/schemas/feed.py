"""Feed Pydantic schemas."""

from pydantic import BaseModel, Field

from .quote import QuoteResponse


class FeedPageResponse(BaseModel):
    """One feed page plus the positions where ad placeholders go."""

    items: list[QuoteResponse]
    has_more: bool
    page: int
    page_size: int
    search_term: str = ""
    ad_positions: list[int] = Field(
        default_factory=list,
        description="0-based item indices followed by an ad placeholder",
    )
