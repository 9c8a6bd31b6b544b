"""
NoteStore — Health Check Route
===============================

What:  Liveness/readiness probe for supervisors and load balancers.
How:   The service has one dependency, the store directory. It is healthy when
       that directory exists and is writable.

Status levels:
    - healthy:   store directory usable (HTTP 200)
    - unhealthy: store directory missing or read-only (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Request, Response

from notestore import __version__
from notestore.deps import get_note_store
from notestore.schemas.note import HealthResponse
from notestore.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store directory unavailable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    request: Request,
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> HealthResponse:
    available = await store.is_available()
    if not available:
        logger.warning("Health check: store directory %s is not usable", store.root)
        response.status_code = 503

    return HealthResponse(
        status="healthy" if available else "unhealthy",
        version=__version__,
        store="available" if available else "unavailable",
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
