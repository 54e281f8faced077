from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from userhub.core.dependencies import get_cache_service, get_document_store
from userhub.libs.cache import CacheService
from userhub.libs.docstore import DocumentStore

router = APIRouter()


@router.get("/", include_in_schema=False)
async def health_check(
    response: Response,
    store: Annotated[DocumentStore, Depends(get_document_store)],
    cache_service: Annotated[CacheService, Depends(get_cache_service)],
) -> dict[str, str]:
    """
    Basic health check endpoint. Answers 503 when the document store is down;
    the cache is reported but never fails the check.
    """
    store_healthy = await store.health_check()
    cache_healthy = await cache_service.health_check()

    if not store_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if store_healthy else "unhealthy",
        "docstore": "up" if store_healthy else "down",
        "cache": "up" if cache_healthy else "down",
    }
