"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; database check for readiness.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import DbSession

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_class=PlainTextResponse)
async def health():
    """Liveness: is the process up?"""
    return "OK"


@router.get("/ready")
async def ready(session: DbSession):
    """Readiness: can the database answer a trivial query?"""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("readiness check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )
    return {"status": "ready"}
