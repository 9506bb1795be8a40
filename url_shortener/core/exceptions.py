"""Exceptions raised by the URL shortener core and its store."""


class URLShortenerError(Exception):
    """Base class for all URL shortener errors."""

    error_code = "500"


class InvalidURLError(URLShortenerError, ValueError):
    """The URL to shorten is empty, malformed or not HTTP(S)."""

    error_code = "400"


class ShortCodeNotFoundError(URLShortenerError, LookupError):
    """No mapping exists for the requested short code."""

    error_code = "404"

    def __init__(self, short_code: str):
        super().__init__(f"Short code not found: {short_code}")
        self.short_code = short_code


class StoreUnavailableError(URLShortenerError):
    """The backing store failed for a reason other than a uniqueness conflict."""

    error_code = "503"


class UniquenessViolationError(URLShortenerError):
    """A save conflicted with an existing short code or original URL."""

    error_code = "409"


class ShortCodeGenerationError(URLShortenerError):
    """No free short code was found within the allowed number of attempts."""
