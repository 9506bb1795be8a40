"""Services package for URL Shortener Service."""

from .url_service import ShortenResult, UrlShortenerService

__all__ = ["ShortenResult", "UrlShortenerService"]
