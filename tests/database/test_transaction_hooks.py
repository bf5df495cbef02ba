# tests/database/test_transaction_hooks.py
from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.orm import Session

from moviecat.database.core.transaction import after_commit


def test_hook_runs_once_after_commit(fresh_engine):
    calls = []
    with Session(bind=fresh_engine) as session:
        with session.begin():
            after_commit(session, lambda: calls.append("fired"))
            assert calls == []
        assert calls == ["fired"]

        with session.begin():
            pass
        assert calls == ["fired"]


def test_rollback_discards_the_hook_for_later_commits(fresh_engine):
    calls = []
    with Session(bind=fresh_engine) as session:
        with pytest.raises(RuntimeError):
            with session.begin():
                session.execute(text("SELECT 1"))
                after_commit(session, lambda: calls.append("fired"))
                raise RuntimeError("boom")

        with session.begin():
            session.execute(text("SELECT 1"))
        assert calls == []
