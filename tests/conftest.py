# tests/conftest.py
from __future__ import annotations
import os

# Settings are cached on first import; pin the test environment before that.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from typing import Iterable, Optional
from uuid import UUID

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from moviecat.common.naming.slugger import movie_slug
from moviecat.common.settings import get_settings
from moviecat.database.models import Base, Movie, MovieGenre, Rating  # <-- imports models/metadata


def make_sqlite_engine() -> Engine:
    # One shared in-memory database, usable from the TestClient's worker threads
    engine = create_engine(
        "sqlite+pysqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )

    @event.listens_for(engine, "connect")
    def _fks_on(dbapi_conn, _):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(scope="session")
def db_engine():
    cfg = get_settings()
    if not cfg.use_testcontainers:
        engine = make_sqlite_engine()
        try:
            yield engine
        finally:
            engine.dispose()
        return

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(cfg.test_db_image) as pg:
        # Force psycopg (v3) driver in the URL returned by testcontainers (it defaults to psycopg2)
        url = pg.get_connection_url().replace("psycopg2", "psycopg")
        engine = create_engine(url, future=True)
        Base.metadata.create_all(bind=engine)
        try:
            yield engine
        finally:
            Base.metadata.drop_all(bind=engine)
            engine.dispose()


@pytest.fixture()
def fresh_engine():
    """Private in-memory database for tests that really commit."""
    engine = make_sqlite_engine()
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db(db_engine) -> Session:
    """
    Per-test SQLAlchemy Session bound to a transaction (rolled back after each test).
    """
    connection = db_engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, future=True)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


def add_movie(
    session: Session,
    title: str,
    year: int,
    genres: Iterable[str] = ("Drama",),
    *,
    movie_id: Optional[UUID] = None,
) -> Movie:
    """Insert a movie row directly (bypassing the mutation service)."""
    m = Movie(
        title=title,
        year_of_release=year,
        slug=movie_slug(title, year),
        genres=[MovieGenre(name=g) for g in sorted(set(genres))],
    )
    if movie_id is not None:
        m.id = movie_id
    session.add(m)
    session.flush()
    return m


def add_rating(session: Session, movie_id: UUID, user_id: UUID, score: int) -> Rating:
    r = Rating(movie_id=movie_id, user_id=user_id, score=score)
    session.add(r)
    session.flush()
    return r


@pytest.fixture()
def mk_movie(db):
    def _mk(title: str, year: int, genres: Iterable[str] = ("Drama",), **kw) -> Movie:
        return add_movie(db, title, year, genres, **kw)
    return _mk


@pytest.fixture()
def mk_rating(db):
    def _mk(movie_id: UUID, user_id: UUID, score: int) -> Rating:
        return add_rating(db, movie_id, user_id, score)
    return _mk
