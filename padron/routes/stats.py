"""
GET /api/stats -- Aggregate validation counts for the dashboard.

Computed from the real history on every call; nothing is cached.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from padron.deps import get_store
from padron.models.schemas import ErrorResponse, Stats
from padron.store import RegistryStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/api/stats",
    response_model=Stats,
    summary="Validation statistics",
    description="Totals, successes, failures and success rate (one decimal, 0 with no history).",
    tags=["Monitoring"],
    responses={500: {"model": ErrorResponse}},
)
async def stats(store: RegistryStore = Depends(get_store)) -> Stats:
    try:
        return Stats(**store.validation_stats())
    except Exception:
        logger.exception("Failed to compute statistics")
        raise HTTPException(status_code=500, detail="Error fetching statistics")
