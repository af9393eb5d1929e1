"""Author-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuthorRef(BaseModel):
    """Author summary embedded in quotes and comments."""

    id: str
    name: str
    avatar_url: str | None = None
    is_verified: bool = False

    model_config = ConfigDict(from_attributes=True)


class AuthorResponse(AuthorRef):
    """Public author profile."""

    bio: str | None = None
    created_at: datetime


class AuthorListItem(AuthorResponse):
    """Author directory entry with the number of visible quotes."""

    quotes_count: int = 0


class AuthorUpdate(BaseModel):
    """Fields an author may change on their own profile."""

    name: str | None = Field(None, min_length=1, max_length=100)
    bio: str | None = Field(None, max_length=500)
    avatar_url: str | None = Field(None, max_length=2048)


class AuthorStatsResponse(BaseModel):
    """Totals over an author's approved quotes."""

    author_id: str
    total_quotes: int
    total_views: int
    total_shares: int
    total_reactions: int
