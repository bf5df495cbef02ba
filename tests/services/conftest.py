# tests/services/conftest.py
from __future__ import annotations

import uuid
from typing import Callable, Dict

import pytest
from starlette.testclient import TestClient

from moviecat.services.api.app import create_app
from moviecat.services.api.deps import transactional_session
from moviecat.services.auth.tokens import issue_token
from moviecat.services.cache.coordinator import CacheCoordinator


@pytest.fixture()
def api_cache() -> CacheCoordinator:
    return CacheCoordinator(ttl_seconds=60.0)


@pytest.fixture()
def api_client(db, api_cache):
    """
    A TestClient whose FastAPI dependency `transactional_session` is overridden
    to yield the test's own Session (see the top-level `db` fixture).
    All API calls in one test share that session (so POST -> GET works),
    and everything is rolled back at the end of the test.
    """
    app = create_app(cache=api_cache)

    def _override():
        # yield the same session for every request in this test
        yield db

    app.dependency_overrides[transactional_session] = _override

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers() -> Callable[..., Dict[str, str]]:
    """
    auth_headers()                    -> a fresh reader
    auth_headers(writer=True)         -> a fresh writer
    auth_headers(sub=some_uuid)       -> a specific user
    """
    def _mk(*, sub=None, writer: bool = False, **claims) -> Dict[str, str]:
        payload = {"sub": str(sub or uuid.uuid4())}
        if writer:
            payload["roles"] = ["movies.write"]
        payload.update(claims)
        return {"Authorization": f"Bearer {issue_token(payload)}"}
    return _mk
