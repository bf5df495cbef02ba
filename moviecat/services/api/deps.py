# moviecat/services/api/deps.py
from __future__ import annotations
from http import HTTPStatus
from typing import Any, Dict, Generator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from moviecat.common.settings import get_settings
from moviecat.database.core.main import new_session
from moviecat.domain.policies.access import can_write, user_id_from_claims
from moviecat.services.auth.tokens import InvalidToken, decode_claims
from moviecat.services.catalog.mutations import CatalogMutationService
from moviecat.services.catalog.query_service import CatalogQueryService

_bearer = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = new_session()
    try:
        yield db
    finally:
        db.close()

def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Any repo/service using this session
    participates in the same transaction.

    Usage in routers:
      def endpoint(session: Session = Depends(transactional_session, scope="function")):
          ...

    With scope="function" the COMMIT runs when the endpoint returns, before
    the response is sent.
    """
    # Using the Session.begin() context ensures COMMIT on normal exit,
    # and ROLLBACK if an exception bubbles out.
    with db.begin():
        yield db


# ---------------- services (built once in create_app) ----------------

def get_catalog(request: Request) -> CatalogQueryService:
    return request.app.state.catalog

def get_mutations(request: Request) -> CatalogMutationService:
    return request.app.state.mutations


# ---------------- identity ----------------

def get_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[Dict[str, Any]]:
    """Claim set of the bearer token, None for anonymous requests. A bad token is a 401."""
    if credentials is None:
        return None
    try:
        return decode_claims(credentials.credentials)
    except InvalidToken as e:
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=f"Invalid token: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

def get_optional_user_id(claims: Optional[Dict[str, Any]] = Depends(get_claims)) -> Optional[UUID]:
    return user_id_from_claims(claims)

def require_user_id(user_id: Optional[UUID] = Depends(get_optional_user_id)) -> UUID:
    if user_id is None:
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id

def require_writer(claims: Optional[Dict[str, Any]] = Depends(get_claims)) -> UUID:
    user_id = user_id_from_claims(claims)
    if user_id is None:
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not can_write(claims, get_settings().auth.write_role):
        raise HTTPException(status_code=HTTPStatus.FORBIDDEN, detail="Missing write role")
    return user_id
