"""Utils package for URL Shortener Service."""

from .shortener import (
    ALPHABET,
    is_valid_url,
    is_valid_short_code,
    encode_base62,
    derive_code,
    create_short_url,
)

__all__ = [
    "ALPHABET",
    "is_valid_url",
    "is_valid_short_code",
    "encode_base62",
    "derive_code",
    "create_short_url",
]
