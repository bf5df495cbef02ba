"""movie, movie_genre and rating

Revision ID: 3f1c9a7b2d10
Revises:
Create Date: 2026-10-17 09:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7b2d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'movie',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('year_of_release', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=128), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_movie')),
        sa.UniqueConstraint('slug', name='uq_movie_slug'),
    )
    op.create_index('ix_movie_year_of_release', 'movie', ['year_of_release'], unique=False)
    op.create_index('ix_movie_title_lower', 'movie', [sa.text('lower(title)')], unique=False)

    op.create_table(
        'movie_genre',
        sa.Column('movie_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'],
                                name=op.f('fk_movie_genre_movie_id_movie'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('movie_id', 'name', name=op.f('pk_movie_genre')),
    )

    op.create_table(
        'rating',
        sa.Column('movie_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('rated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.CheckConstraint('score BETWEEN 1 AND 5', name=op.f('ck_rating_score_1_5')),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'],
                                name=op.f('fk_rating_movie_id_movie'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('movie_id', 'user_id', name=op.f('pk_rating')),
    )
    op.create_index('ix_rating_user_id', 'rating', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_rating_user_id', table_name='rating')
    op.drop_table('rating')
    op.drop_table('movie_genre')
    op.drop_index('ix_movie_title_lower', table_name='movie')
    op.drop_index('ix_movie_year_of_release', table_name='movie')
    op.drop_table('movie')
