from __future__ import annotations

from datetime import datetime
from typing import Optional, List
from uuid import UUID as UUID_t

from sqlalchemy import (
    DateTime, ForeignKey, Integer, String, Text, Uuid,
    UniqueConstraint, CheckConstraint, Index, func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moviecat.database.core.main import Base
from moviecat.database.core.service_object import ServiceObject


class Movie(ServiceObject, Base):
    __tablename__ = "movie"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_movie_slug"),
        Index("ix_movie_year_of_release", "year_of_release"),
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    year_of_release: Mapped[int] = mapped_column(Integer, nullable=False)
    # derived from title + year at the app layer; alternate lookup key
    slug: Mapped[str] = mapped_column(String(128), nullable=False)

    # relationships
    genres: Mapped[List["MovieGenre"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="MovieGenre.name",
    )
    ratings: Mapped[List["Rating"]] = relationship(
        back_populates="movie", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def genre_names(self) -> List[str]:
        return [g.name for g in self.genres]

Index("ix_movie_title_lower", func.lower(Movie.title))


class MovieGenre(Base):
    __tablename__ = "movie_genre"

    movie_id: Mapped[UUID_t] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("movie.id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str] = mapped_column(String(64), primary_key=True)

    movie: Mapped[Movie] = relationship(back_populates="genres")


class Rating(Base):
    __tablename__ = "rating"
    __table_args__ = (
        CheckConstraint("score BETWEEN 1 AND 5", name="score_1_5"),
        Index("ix_rating_user_id", "user_id"),
    )

    movie_id: Mapped[UUID_t] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("movie.id", ondelete="CASCADE"), primary_key=True
    )
    # identity comes from the auth layer; there is no local users table
    user_id: Mapped[UUID_t] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    rated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    movie: Mapped[Movie] = relationship(back_populates="ratings")
