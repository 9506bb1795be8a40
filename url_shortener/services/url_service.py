"""Shortening and resolution logic.

Short codes are derived from the URL itself, so shortening is idempotent and
needs no coordination beyond the store's uniqueness constraints:

1. An already shortened URL returns its existing code.
2. Otherwise the candidate for attempt 0, 1, ... is derived until one is
   free or already belongs to the same URL.
3. A save that loses a race re-reads the store instead of failing.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.config import settings
from ..core.database import UrlMappingStore
from ..core.exceptions import (
    InvalidURLError,
    ShortCodeGenerationError,
    ShortCodeNotFoundError,
    StoreUnavailableError,
    UniquenessViolationError,
)
from ..models.url import UrlMapping
from ..utils.shortener import create_short_url, derive_code, is_valid_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of a shorten call."""

    short_code: str
    short_url: str
    original_url: str


class UrlShortenerService:
    """Shortener/resolver pair over a single mapping store.

    The service keeps no state besides the store handle and can be shared
    between concurrent callers.
    """

    def __init__(
        self,
        store: UrlMappingStore,
        base_url: str,
        max_attempts: Optional[int] = settings.max_collision_attempts,
    ):
        """Initialize the service.

        Args:
            store: Mapping store enforcing uniqueness on code and URL.
            base_url: Prefix of issued short URLs, e.g. "https://sho.rt".
            max_attempts: Cap on collision retries; None means unbounded.
        """
        self.store = store
        self.base_url = base_url
        self.max_attempts = max_attempts

    def shorten(self, original_url: Optional[str]) -> ShortenResult:
        """Shorten a URL, reusing its code if it was shortened before.

        Args:
            original_url: The original long URL.

        Returns:
            The short code and short URL.

        Raises:
            InvalidURLError: The URL is empty, malformed or not HTTP(S).
            ShortCodeGenerationError: Too many collisions.
            StoreUnavailableError: The store failed.
        """
        if not is_valid_url(original_url):
            raise InvalidURLError(f"Invalid URL: {original_url!r}")

        existing = self.store.find_by_original_url(original_url)
        if existing:
            logger.debug(f"URL already shortened: {existing.short_code}")
            return self._result(existing.short_code, original_url)

        short_code = self._allocate(original_url)
        return self._result(short_code, original_url)

    def expand(self, short_code: str) -> str:
        """Resolve a short code to its original URL.

        Args:
            short_code: The short URL code.

        Returns:
            The original long URL.

        Raises:
            ShortCodeNotFoundError: No mapping exists for the code.
        """
        mapping = self.store.find_by_short_code(short_code)
        if mapping is None:
            logger.debug(f"Short code not found: {short_code}")
            raise ShortCodeNotFoundError(short_code)
        return mapping.original_url

    def _allocate(self, original_url: str) -> str:
        attempt = 0
        while self.max_attempts is None or attempt < self.max_attempts:
            candidate = derive_code(original_url, attempt)
            current = self.store.find_by_short_code(candidate)

            if current is None:
                try:
                    self.store.save(UrlMapping(short_code=candidate, original_url=original_url))
                except UniquenessViolationError:
                    winner = self.store.find_by_original_url(original_url)
                    if winner:
                        logger.info(f"Concurrent shorten won for {winner.short_code}, reusing it")
                        return winner.short_code
                    # Taken meanwhile by another URL
                    current = self.store.find_by_short_code(candidate)
                    if current is None:
                        raise StoreUnavailableError(
                            f"Save of {candidate} was rejected but no conflicting mapping exists"
                        )
                else:
                    logger.info(f"Created short URL: {candidate} -> {original_url}")
                    return candidate

            if current.original_url == original_url:
                return candidate

            logger.warning(f"Short code collision on attempt {attempt}: {candidate}")
            attempt += 1

        raise ShortCodeGenerationError(
            f"No free short code for {original_url!r} after {attempt} attempts"
        )

    def _result(self, short_code: str, original_url: str) -> ShortenResult:
        return ShortenResult(
            short_code=short_code,
            short_url=create_short_url(self.base_url, short_code),
            original_url=original_url,
        )
