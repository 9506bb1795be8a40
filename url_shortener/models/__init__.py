"""Models package for URL Shortener Service."""

from .url import UrlMapping, ShortenRequest, ErrorResponse

__all__ = ["UrlMapping", "ShortenRequest", "ErrorResponse"]
