# moviecat/domain/policies/access.py
from __future__ import annotations

from typing import Any, Mapping, Optional, Set
from uuid import UUID

Claims = Mapping[str, Any]


def user_id_from_claims(claims: Optional[Claims]) -> Optional[UUID]:
    """`sub` as a UUID; None for anonymous callers or a non-UUID subject."""
    if not claims:
        return None
    sub = claims.get("sub")
    if sub is None:
        return None
    try:
        return UUID(str(sub))
    except ValueError:
        return None


def roles_from_claims(claims: Optional[Claims]) -> Set[str]:
    """
    Collect roles from the places identity providers put them:
      - "roles": ["movies.write"]
      - "realm_access": {"roles": [...]}   (Keycloak)
      - "scope": "openid movies.write"
    """
    if not claims:
        return set()
    out: Set[str] = set()

    roles = claims.get("roles")
    if isinstance(roles, str):
        out.add(roles)
    elif isinstance(roles, (list, tuple, set)):
        out.update(str(r) for r in roles)

    realm = claims.get("realm_access")
    if isinstance(realm, Mapping):
        out.update(str(r) for r in realm.get("roles") or ())

    scope = claims.get("scope")
    if isinstance(scope, str):
        out.update(s for s in scope.split() if s)

    return out


def has_role(claims: Optional[Claims], role: str) -> bool:
    return role in roles_from_claims(claims)


def can_write(claims: Optional[Claims], write_role: str = "movies.write") -> bool:
    return user_id_from_claims(claims) is not None and has_role(claims, write_role)
