"""URL shortening utilities module.

This module handles URL validation and the derivation of short codes.
Everything here is pure: no I/O, no randomness, no clock.
"""

import hashlib
import string
from typing import Any, Optional
from urllib.parse import urlsplit

from ..core.config import settings


# Base62 alphabet, in positional order
ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)

# Joins the original URL and the attempt counter into the hash seed
SEED_SEPARATOR = "#"

ALLOWED_SCHEMES = ("http", "https")


def is_valid_url(value: Any, max_length: Optional[int] = None) -> bool:
    """Check that a value is an absolute HTTP(S) URL with a host.

    Validation is purely syntactic; the URL is never fetched.

    Args:
        value: Candidate URL.
        max_length: Maximum accepted length. Defaults to settings value.

    Returns:
        True if valid, False otherwise.
    """
    if not isinstance(value, str) or not value.strip():
        return False
    if len(value) > (max_length or settings.max_url_length):
        return False
    if any(ch.isspace() or not ch.isprintable() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        # Raises ValueError for a non-numeric or out of range port
        parts.port
    except ValueError:
        return False
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return False
    return bool(parts.hostname)


def encode_base62(number: int) -> str:
    """Encode a non-negative integer in base 62, most significant digit first.

    Args:
        number: Integer to encode.

    Returns:
        Base62 string, "0" for zero.
    """
    if number < 0:
        raise ValueError("Cannot encode a negative number")
    if number == 0:
        return ALPHABET[0]

    digits = []
    while number > 0:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def derive_code(original_url: str, attempt: int = 0, length: Optional[int] = None) -> str:
    """Derive the candidate short code for a URL and attempt number.

    The MD5 digest of ``"<url>#<attempt>"`` is read as a big-endian unsigned
    integer, encoded in base 62 and truncated. Attempt 0 is the canonical
    code of a URL; later attempts are only used after collisions.

    Args:
        original_url: The original long URL.
        attempt: Collision retry counter, starting at 0.
        length: Maximum code length. Defaults to settings value.

    Returns:
        Short code of 1 to ``length`` characters.
    """
    seed = f"{original_url}{SEED_SEPARATOR}{attempt}"
    digest = hashlib.md5(seed.encode("utf-8")).digest()
    number = int.from_bytes(digest, byteorder="big", signed=False)
    return encode_base62(number)[: length or settings.short_code_max_length]


def is_valid_short_code(code: Any) -> bool:
    """Check that a value could be an issued short code."""
    if not isinstance(code, str) or not code:
        return False
    if len(code) > settings.short_code_max_length:
        return False
    return all(ch in ALPHABET for ch in code)


def create_short_url(base_url: str, short_code: str) -> str:
    """Create full short URL from base URL and short code.

    Args:
        base_url: Base URL of the service.
        short_code: Short code.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{short_code}"
