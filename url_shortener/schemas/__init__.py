"""Schemas package for URL Shortener Service."""

from .url import (
    ShortenResponse,
    ExpandResponse,
    HealthResponse,
)

__all__ = [
    "ShortenResponse",
    "ExpandResponse",
    "HealthResponse",
]
