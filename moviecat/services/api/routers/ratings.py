from __future__ import annotations

from http import HTTPStatus
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from moviecat.common.settings import get_settings
from moviecat.services.api.deps import (
    transactional_session, get_catalog, get_mutations, require_user_id,
)
from moviecat.services.catalog.mutations import CatalogMutationService
from moviecat.services.catalog.query_service import CatalogQueryService
from moviecat.services.mappers.movie import to_rating_schema
from moviecat.services.schemas import RatingCreate, RatingRead

cfg = get_settings()
router = APIRouter(prefix=cfg.api.prefix, tags=["ratings"])

@router.put("/movies/{movie_id}/ratings", response_model=RatingRead)
def put_rating(
    payload: RatingCreate,
    movie_id: UUID = Path(...),
    user_id: UUID = Depends(require_user_id),
    mutations: CatalogMutationService = Depends(get_mutations),
    db: Session = Depends(transactional_session, scope="function"),
) -> RatingRead:
    # upsert: one rating per (movie, user), a resubmission replaces the score
    rating = mutations.rate_movie(db, movie_id, user_id, payload.rating)
    return to_rating_schema(rating)

@router.delete("/movies/{movie_id}/ratings", status_code=HTTPStatus.NO_CONTENT)
def delete_rating(
    movie_id: UUID = Path(...),
    user_id: UUID = Depends(require_user_id),
    mutations: CatalogMutationService = Depends(get_mutations),
    db: Session = Depends(transactional_session, scope="function"),
) -> None:
    mutations.delete_rating(db, movie_id, user_id)

@router.get("/ratings/me", response_model=List[RatingRead])
def get_my_ratings(
    user_id: UUID = Depends(require_user_id),
    catalog: CatalogQueryService = Depends(get_catalog),
    db: Session = Depends(transactional_session, scope="function"),
) -> List[RatingRead]:
    return [to_rating_schema(r) for r in catalog.ratings.ratings_for_user(db, user_id)]
