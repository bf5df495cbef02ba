# tests/database/test_sqlalchemy_movie_repo.py
from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select

from moviecat.database.models import MovieGenre, Rating
from moviecat.database.repos.movie_repo import SqlAlchemyMovieRepo
from moviecat.domain.entities.movie import Movie
from moviecat.domain.errors import ConflictError


def _movie(title="Inception", year=2010, genres=("Sci-Fi",)) -> Movie:
    return Movie(title=title, year_of_release=year, genres=frozenset(genres))


def test_create_movie_assigns_id_and_slug(db):
    repo = SqlAlchemyMovieRepo(db)
    row = repo.create_movie(_movie(genres=("Sci-Fi", "Thriller")))

    assert row.id is not None
    assert row.slug == "inception-2010"
    assert row.genre_names == ["Sci-Fi", "Thriller"]
    assert repo.get(row.id) is row


def test_duplicate_title_and_year_conflicts(db):
    repo = SqlAlchemyMovieRepo(db)
    repo.create_movie(_movie())

    with pytest.raises(ConflictError) as ei:
        repo.create_movie(_movie(title="  inception "))
    assert ei.value.retryable is False


def test_same_title_other_year_is_fine(db):
    repo = SqlAlchemyMovieRepo(db)
    a = repo.create_movie(_movie(title="Dune", year=1984))
    b = repo.create_movie(_movie(title="Dune", year=2021))
    assert {a.slug, b.slug} == {"dune-1984", "dune-2021"}


def test_update_replaces_fields_and_diffs_genres(db):
    repo = SqlAlchemyMovieRepo(db)
    row = repo.create_movie(_movie(genres=("Sci-Fi", "Thriller")))

    updated = repo.update_movie(row.id, _movie(title="Inception (Extended)", genres=("Sci-Fi", "Action")))

    assert updated.title == "Inception (Extended)"
    assert updated.slug == "inception-extended-2010"
    assert sorted(updated.genre_names) == ["Action", "Sci-Fi"]
    names = db.execute(
        select(MovieGenre.name).where(MovieGenre.movie_id == row.id).order_by(MovieGenre.name)
    ).scalars().all()
    assert names == ["Action", "Sci-Fi"]


def test_update_into_another_movies_slug_conflicts(db):
    repo = SqlAlchemyMovieRepo(db)
    repo.create_movie(_movie(title="Heat", year=1995))
    other = repo.create_movie(_movie(title="Ronin", year=1998))

    with pytest.raises(ConflictError):
        repo.update_movie(other.id, _movie(title="Heat", year=1995))


def test_update_keeping_own_slug_is_not_a_conflict(db):
    repo = SqlAlchemyMovieRepo(db)
    row = repo.create_movie(_movie(genres=("Sci-Fi",)))
    updated = repo.update_movie(row.id, _movie(genres=("Sci-Fi", "Drama")))
    assert updated.slug == "inception-2010"


def test_update_missing_returns_none(db):
    assert SqlAlchemyMovieRepo(db).update_movie(uuid.uuid4(), _movie()) is None


def test_delete_movie_cascades_to_genres_and_ratings(db, mk_rating):
    repo = SqlAlchemyMovieRepo(db)
    row = repo.create_movie(_movie(genres=("Sci-Fi", "Thriller")))
    movie_id = row.id
    mk_rating(movie_id, uuid.uuid4(), 4)
    db.expunge_all()

    assert repo.delete_movie(movie_id) is True
    assert repo.get(movie_id) is None
    assert repo.delete_movie(movie_id) is False

    genres = db.execute(select(func.count()).select_from(MovieGenre).where(MovieGenre.movie_id == movie_id)).scalar_one()
    ratings = db.execute(select(func.count()).select_from(Rating).where(Rating.movie_id == movie_id)).scalar_one()
    assert genres == 0
    assert ratings == 0
