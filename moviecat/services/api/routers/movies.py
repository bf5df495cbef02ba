from __future__ import annotations
from http import HTTPStatus
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Path, Response
from sqlalchemy.orm import Session

from moviecat.common.settings import get_settings
from moviecat.domain.policies.query_options import resolve_query_options
from moviecat.services.api.deps import (
    transactional_session, get_catalog, get_mutations,
    get_optional_user_id, require_writer,
)
from moviecat.services.catalog.mutations import CatalogMutationService
from moviecat.services.catalog.query_service import CatalogQueryService
from moviecat.services.mappers.movie import to_page_schema, to_read_schema
from moviecat.services.schemas import MovieCreate, MovieRead, MovieUpdate, MoviesPage

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/movies", tags=["movies"])


@router.get("", response_model=MoviesPage)
def list_movies(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    year: Optional[int] = Query(None, description="Exact year of release"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="title | year, prefix '-' for descending"),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    user_id: Optional[UUID] = Depends(get_optional_user_id),
    catalog: CatalogQueryService = Depends(get_catalog),
    session: Session = Depends(transactional_session, scope="function"),
) -> MoviesPage:
    spec = resolve_query_options(
        title=title, year=year, sort_by=sort_by, page=page, page_size=page_size, user_id=user_id,
    )
    return to_page_schema(catalog.list_movies(session, spec))


@router.get("/{id_or_slug}", response_model=MovieRead)
def get_movie(
    id_or_slug: str = Path(..., description="Movie id (UUID) or slug"),
    user_id: Optional[UUID] = Depends(get_optional_user_id),
    catalog: CatalogQueryService = Depends(get_catalog),
    session: Session = Depends(transactional_session, scope="function"),
) -> MovieRead:
    return to_read_schema(catalog.get_by_id_or_slug(session, id_or_slug, user_id))


@router.post("", response_model=MovieRead, status_code=HTTPStatus.CREATED)
def create_movie(
    payload: MovieCreate,
    response: Response,
    _writer: UUID = Depends(require_writer),
    mutations: CatalogMutationService = Depends(get_mutations),
    session: Session = Depends(transactional_session, scope="function"),
) -> MovieRead:
    created = mutations.create_movie(
        session, title=payload.title, year_of_release=payload.year_of_release, genres=payload.genres,
    )
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return to_read_schema(created)


@router.put("/{movie_id}", response_model=MovieRead)
def update_movie(
    payload: MovieUpdate,
    movie_id: UUID = Path(...),
    writer_id: UUID = Depends(require_writer),
    mutations: CatalogMutationService = Depends(get_mutations),
    session: Session = Depends(transactional_session, scope="function"),
) -> MovieRead:
    updated = mutations.update_movie(
        session,
        movie_id,
        title=payload.title,
        year_of_release=payload.year_of_release,
        genres=payload.genres,
        user_id=writer_id,
    )
    return to_read_schema(updated)


@router.delete("/{movie_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_movie(
    movie_id: UUID = Path(...),
    _writer: UUID = Depends(require_writer),
    mutations: CatalogMutationService = Depends(get_mutations),
    session: Session = Depends(transactional_session, scope="function"),
) -> None:
    mutations.delete_movie(session, movie_id)
