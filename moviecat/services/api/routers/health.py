# moviecat/services/api/routers/health.py
from __future__ import annotations
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moviecat.common.logging import get_logger
from moviecat.common.settings import get_settings
from moviecat.services.api.deps import transactional_session

log = get_logger(__name__)
router = APIRouter(tags=["health"])

@router.get("/healthz")
def healthz(session: Session = Depends(transactional_session, scope="function")):
    s = get_settings()
    body = {
        "ok": True,
        "app": s.app_name,
        "env": s.app_env,
        "database": "ok",
    }
    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        log.error("Health check: database unreachable: %s", e)
        body.update(ok=False, database="unavailable")
        return JSONResponse(body, status_code=503)
    return body
