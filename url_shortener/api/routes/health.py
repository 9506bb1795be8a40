"""Health check API routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.database import UrlMappingStore, get_db
from ...core.exceptions import StoreUnavailableError
from ...schemas.url import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(db: UrlMappingStore = Depends(get_db)):
    """Health check endpoint.

    Returns:
        Health status, 503 when the store cannot be queried.
    """
    try:
        db.count()
    except StoreUnavailableError:
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "healthy"}
