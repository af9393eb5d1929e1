"""Engagement Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class LikeStateResponse(BaseModel):
    """Viewer's like state on a quote."""

    quote_id: str
    liked: bool
    likes_count: int


class ViewResponse(BaseModel):
    quote_id: str
    views_count: int


class ImpressionResponse(BaseModel):
    """Handle of an armed view tracker."""

    token: str
    delay_ms: int


class ShareCreate(BaseModel):
    """Schema for registering a share."""

    platform: Literal["copy", "copy-quote", "twitter", "facebook", "whatsapp", "telegram"] = Field(
        ...,
        description="Where the quote was shared",
    )


class ShareResponse(BaseModel):
    quote_id: str
    shares_count: int
    url: str | None = None
