"""Core package - configuration, errors and the mapping store."""

from .config import settings, get_settings
from .database import Database, UrlMappingStore, db, get_db
from .exceptions import (
    URLShortenerError,
    InvalidURLError,
    ShortCodeNotFoundError,
    StoreUnavailableError,
    UniquenessViolationError,
    ShortCodeGenerationError,
)

__all__ = [
    "settings",
    "get_settings",
    "Database",
    "UrlMappingStore",
    "db",
    "get_db",
    "URLShortenerError",
    "InvalidURLError",
    "ShortCodeNotFoundError",
    "StoreUnavailableError",
    "UniquenessViolationError",
    "ShortCodeGenerationError",
]
