from typing import Annotated

from fastapi import Depends, Request
from userhub.domain.services import AccountService, AuthService
from userhub.libs.cache import CacheService
from userhub.libs.docstore import DocumentStore


def get_document_store(request: Request) -> DocumentStore:
    """
    Dependency to get the document store opened by the application lifespan.

    Returns:
        The document store instance
    """
    return request.app.state.document_store


def get_cache_service(request: Request) -> CacheService:
    """
    Dependency to get the cache service opened by the application lifespan.

    Returns:
        The cache service instance
    """
    return request.app.state.cache_service


def get_account_service(
    store: Annotated[DocumentStore, Depends(get_document_store)],
    cache_service: Annotated[CacheService, Depends(get_cache_service)],
) -> AccountService:
    return AccountService(store=store, cache_service=cache_service)


def get_auth_service(
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> AuthService:
    return AuthService(store=store)
