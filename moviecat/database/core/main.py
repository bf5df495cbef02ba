# moviecat/database/core/main.py
from __future__ import annotations

from functools import lru_cache
from typing import List

from sqlalchemy import MetaData, create_engine, event, Column, Table
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from moviecat.common.settings import get_settings

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

_serviceobject_first = ("id", "date_created", "last_updated")

class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @classmethod
    def __table_cls__(cls, *args, **kw):
        """Reorder columns so ServiceObject fields come first."""
        if not args:
            return super().__table_cls__(*args, **kw)

        # Positional args are (name, metadata, *columns_and_constraints)
        name, metadata, *rest = args

        cols: List[Column] = [x for x in rest if isinstance(x, Column)]
        others = [x for x in rest if not isinstance(x, Column)]

        priority = {n: i for i, n in enumerate(_serviceobject_first)}
        original_index = {c: i for i, c in enumerate(cols)}

        cols.sort(key=lambda c: (priority.get(c.name, 10_000), original_index[c]))

        return Table(name, metadata, *(cols + others), **kw)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """
    Build the process-wide Engine on first use so importing models never
    needs a reachable database (or its driver).
    """
    s = get_settings()
    url = s.database_url
    if _is_sqlite(url):
        engine = create_engine(url, echo=s.db.echo, future=True)

        # ON DELETE CASCADE is ignored by SQLite unless enabled per connection
        @event.listens_for(engine, "connect")
        def _enable_fks(dbapi_conn, _):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

        return engine

    return create_engine(
        url,
        echo=s.db.echo,
        pool_size=s.db.pool_size,
        max_overflow=s.db.max_overflow,
        pool_pre_ping=s.db.pool_pre_ping,
        pool_recycle=s.db.pool_recycle,
        future=True,
    )


SessionLocal = sessionmaker(expire_on_commit=False, future=True, autoflush=False)


def new_session() -> Session:
    return SessionLocal(bind=get_engine())

