"""Pydantic models for URL Shortener Service."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UrlMapping(BaseModel):
    """Immutable mapping between a short code and its original URL."""

    model_config = ConfigDict(frozen=True)

    short_code: str = Field(..., min_length=1, max_length=10)
    original_url: str = Field(..., min_length=1, max_length=2048)


class ShortenRequest(BaseModel):
    """Model for shortening a URL.

    Missing, null and malformed URLs are left to the service validator (400).
    """

    model_config = ConfigDict(populate_by_name=True)

    original_url: Optional[str] = Field(
        None, alias="originalUrl", description="The original long URL to shorten"
    )


class ErrorResponse(BaseModel):
    """Model for error responses."""

    detail: str
    error_code: Optional[str] = None
