"""Response schemas for URL Shortener Service."""

from pydantic import BaseModel, ConfigDict, Field


class ShortenResponse(BaseModel):
    """Response model for a shortened URL."""

    model_config = ConfigDict(populate_by_name=True)

    short_url: str = Field(..., alias="shortUrl")
    short_code: str = Field(..., alias="shortCode")
    original_url: str = Field(..., alias="originalUrl")


class ExpandResponse(BaseModel):
    """Response model for an expanded short code."""

    model_config = ConfigDict(populate_by_name=True)

    original_url: str = Field(..., alias="originalUrl")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
