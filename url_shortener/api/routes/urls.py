"""URL shortening API routes.

This module contains all endpoints for URL operations:
- Shorten a URL (POST /api/shorten)
- Expand a short code (GET /api/expand/{short_code})
- Redirect to original URL (GET /{short_code})
"""

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from ...core.config import settings
from ...core.database import UrlMappingStore, get_db
from ...core.exceptions import ShortCodeNotFoundError
from ...models.url import ShortenRequest, ErrorResponse
from ...schemas.url import ShortenResponse, ExpandResponse
from ...services.url_service import UrlShortenerService
from ...utils.shortener import is_valid_short_code

router = APIRouter(prefix="", tags=["URLs"])


def get_url_service(db: UrlMappingStore = Depends(get_db)) -> UrlShortenerService:
    """Build the shortening service for a request.

    Args:
        db: Mapping store.

    Returns:
        Service bound to the store and the configured base URL.
    """
    return UrlShortenerService(
        store=db,
        base_url=settings.base_url,
        max_attempts=settings.max_collision_attempts,
    )


@router.post(
    "/api/shorten",
    response_model=ShortenResponse,
    responses={
        200: {"description": "Short URL created or reused"},
        400: {"model": ErrorResponse, "description": "Invalid URL"},
    },
    summary="Create a short URL",
    description="Shorten a URL. Shortening the same URL again returns the same short URL.",
)
async def shorten_url(
    url_data: ShortenRequest,
    service: UrlShortenerService = Depends(get_url_service),
) -> ShortenResponse:
    """Create a short URL from a long URL.

    Args:
        url_data: URL creation data.
        service: Shortening service.

    Returns:
        Short URL information.
    """
    result = service.shorten(url_data.original_url)
    return ShortenResponse(
        short_url=result.short_url,
        short_code=result.short_code,
        original_url=result.original_url,
    )


@router.get(
    "/api/expand/{short_code}",
    response_model=ExpandResponse,
    responses={
        200: {"description": "Original URL found"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Expand a short code",
    description="Get the original URL associated with a short code.",
)
async def expand_short_code(
    short_code: str,
    service: UrlShortenerService = Depends(get_url_service),
) -> ExpandResponse:
    """Get the original URL for a short code.

    Args:
        short_code: The short URL code.
        service: Shortening service.

    Returns:
        Original URL.
    """
    if not is_valid_short_code(short_code):
        raise ShortCodeNotFoundError(short_code)
    return ExpandResponse(original_url=service.expand(short_code))


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Redirect to original URL",
    description="Redirect to the original URL associated with the short code.",
)
async def redirect_to_url(
    short_code: str,
    service: UrlShortenerService = Depends(get_url_service),
) -> RedirectResponse:
    """Redirect to the original URL.

    Args:
        short_code: The short URL code.
        service: Shortening service.

    Returns:
        Redirect response to original URL.
    """
    if not is_valid_short_code(short_code):
        raise ShortCodeNotFoundError(short_code)
    return RedirectResponse(url=service.expand(short_code), status_code=302)
