"""Quote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from quoteboard.services.short_code import encode

from .author import AuthorRef


class QuoteCreate(BaseModel):
    """Schema for submitting a new quote."""

    content: str = Field(..., min_length=1, max_length=5000, description="Quote text")
    notes: str | None = Field(None, max_length=1000, description="Optional context or source")


class QuoteResponse(BaseModel):
    """Schema for quote information returned by the API."""

    id: str
    code: str
    content: str
    notes: str | None = None
    created_at: datetime
    views_count: int
    likes_count: int
    shares_count: int
    is_approved: bool
    is_active: bool
    author: AuthorRef

    @model_validator(mode="before")
    @classmethod
    def _derive_code(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            data = extracted

        if not data.get("code") and isinstance(data.get("id"), str):
            data["code"] = encode(data["id"])
        return data

    model_config = ConfigDict(from_attributes=True)


class ShareLinksResponse(BaseModel):
    """Permalink and platform share intents for one quote."""

    quote_id: str
    code: str
    title: str
    permalink: str
    text: str
    links: dict[str, str]
