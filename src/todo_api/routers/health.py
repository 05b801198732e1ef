from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..repositories import Repository, get_repository
from ..schemas import HealthOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


# PUBLIC_INTERFACE
@router.get(
    "/health",
    response_model=HealthOut,
    summary="Health Check",
    responses={500: {"model": HealthOut, "description": "Database unreachable"}},
)
async def health_check(repo: Repository = Depends(get_repository)):
    """
    Run a single trivial query against the database.

    Returns:
        {"ok": true} when it succeeds, {"ok": false} with status 500 otherwise.
        The probe is not retried.
    """
    try:
        await repo.ping()
    except Exception:
        logger.warning("Health check query failed", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False},
        )
    return HealthOut(ok=True)
