# moviecat/services/auth/tokens.py
from __future__ import annotations

from typing import Any, Dict, Optional

import jwt

from moviecat.common.settings import AuthConfig, get_settings


class InvalidToken(Exception):
    """Bearer token could not be decoded or failed validation."""


def decode_claims(token: str, cfg: Optional[AuthConfig] = None) -> Dict[str, Any]:
    """
    Decode and validate a bearer token into its claim set. Audience and issuer
    are only checked when configured.
    """
    cfg = cfg or get_settings().auth
    options = {"verify_aud": cfg.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            cfg.jwt_secret,
            algorithms=[cfg.jwt_algo],
            audience=cfg.jwt_audience,
            issuer=cfg.jwt_issuer,
            options=options,
        )
    except jwt.PyJWTError as e:
        raise InvalidToken(str(e)) from e


def issue_token(claims: Dict[str, Any], cfg: Optional[AuthConfig] = None) -> str:
    """Sign `claims` with the configured secret (dev tooling and tests)."""
    cfg = cfg or get_settings().auth
    return jwt.encode(dict(claims), cfg.jwt_secret, algorithm=cfg.jwt_algo)
