from __future__ import annotations

from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moviecat.common.logging import get_logger
from moviecat.common.settings import get_settings
from moviecat.domain.errors import ConflictError, NotFoundError, ValidationError
from moviecat.services.api.routers import health, movies, ratings
from moviecat.services.cache.coordinator import CacheCoordinator
from moviecat.services.catalog.mutations import CatalogMutationService
from moviecat.services.catalog.query_service import CatalogQueryService
from moviecat.services.catalog.ratings import RatingAggregator

cfg = get_settings()
dev = cfg.app_env.lower() == "development"
log = get_logger(__name__)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_: Request, exc: ValidationError):
        return JSONResponse(
            status_code=HTTPStatus.BAD_REQUEST,
            content={"detail": str(exc), "errors": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def _not_found(_: Request, exc: NotFoundError):
        return JSONResponse(status_code=HTTPStatus.NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(ConflictError)
    async def _conflict(_: Request, exc: ConflictError):
        return JSONResponse(
            status_code=HTTPStatus.CONFLICT,
            content={"detail": str(exc), "retryable": exc.retryable},
        )


def create_app(cache: Optional[CacheCoordinator] = None) -> FastAPI:
    app = FastAPI(
        title="Movies API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs" if dev else None,
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    # Services: built once per process, per-request data travels as arguments
    if cache is None and cfg.cache.enabled:
        cache = CacheCoordinator(ttl_seconds=cfg.cache.ttl_seconds, default_tag=cfg.cache.tag)
    ratings_agg = RatingAggregator()
    app.state.cache = cache
    app.state.catalog = CatalogQueryService(
        ratings_agg, cache, tag=cfg.cache.tag, ttl_seconds=cfg.cache.ttl_seconds,
    )
    app.state.mutations = CatalogMutationService(ratings_agg, cache, tag=cfg.cache.tag)
    log.info("Listing cache %s (ttl=%ss)", "enabled" if cache is not None else "disabled", cfg.cache.ttl_seconds)

    _install_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(movies.router)
    app.include_router(ratings.router)
    return app

app = create_app()
