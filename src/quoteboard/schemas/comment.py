"""Comment Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .author import AuthorRef


class CommentCreate(BaseModel):
    """Schema for submitting a comment."""

    content: str = Field(..., min_length=1, max_length=500)


class CommentResponse(BaseModel):
    id: str
    quote_id: str
    content: str
    is_approved: bool
    created_at: datetime
    author: AuthorRef

    model_config = ConfigDict(from_attributes=True)
