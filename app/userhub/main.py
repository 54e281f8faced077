import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi_problem.handler import add_exception_handler
from userhub.core.config import settings
from userhub.core.exceptions.handler import eh
from userhub.core.logging import get_logger, setup_exception_logging, setup_logging
from userhub.domain.routers import account_router, auth_router, health_router
from userhub.libs.cache import setup_cache, teardown_cache
from userhub.libs.docstore import DocumentStoreFactory

if settings.ENVIRONMENT in ["staging", "production"]:
    setup_logging()
    setup_exception_logging()


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the document store and the cache for the lifetime of the application.
    """
    store = None
    try:
        logger.info("Application startup initiated", extra={"event_type": "app_startup_start"})

        store = DocumentStoreFactory.get_configured_store()
        app.state.document_store = store
        app.state.cache_service = await setup_cache()

        logger.info(
            "Application startup completed successfully",
            extra={
                "event_type": "app_startup_complete",
                "environment": settings.ENVIRONMENT,
                "app_version": settings.APP_VERSION,
                "docstore_backend": settings.DOCSTORE_BACKEND,
            },
        )

        yield

    except Exception as exc:
        logger.error(
            "Application startup failed",
            exc_info=True,
            extra={
                "event_type": "app_startup_failed",
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            },
        )
        raise
    finally:
        try:
            logger.info("Application shutdown initiated", extra={"event_type": "app_shutdown_start"})

            await teardown_cache()
            if store is not None:
                await store.close()
                logger.info("Document store closed", extra={"event_type": "docstore_closed"})

            logger.info("Application shutdown completed", extra={"event_type": "app_shutdown_complete"})

        except asyncio.CancelledError:
            logger.info(
                "Application shutdown cancelled - graceful shutdown",
                extra={"event_type": "app_shutdown_cancelled"},
            )
        except Exception as exc:
            logger.error(
                "Error during application shutdown",
                exc_info=True,
                extra={
                    "event_type": "app_shutdown_error",
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                },
            )


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    redoc_url=None,
)

add_exception_handler(app, eh)


# Middlewares
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(GZipMiddleware, compresslevel=5)


# Routers (V1)
app.include_router(account_router, prefix=f"{settings.API_V1_STR}/users", tags=["Users"])
app.include_router(auth_router, prefix=f"{settings.API_V1_STR}/auth", tags=["Auth"])
app.include_router(health_router, prefix="/health", include_in_schema=False)
