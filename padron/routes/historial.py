"""
GET /api/historial -- Validation history.

Every biometric comparison appends one entry; entries are never
modified or deleted. Newest first.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from padron.deps import get_store
from padron.models.schemas import ErrorResponse, ValidationHistoryEntry
from padron.store import RegistryStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/api/historial",
    response_model=list[ValidationHistoryEntry],
    summary="List validation attempts",
    tags=["History"],
    responses={500: {"model": ErrorResponse}},
)
async def list_history(
    institution: str | None = Query(default=None, description="Only attempts made by this institution."),
    store: RegistryStore = Depends(get_store),
) -> list[ValidationHistoryEntry]:
    try:
        return store.list_validations(institution=institution or None)
    except Exception:
        logger.exception("Failed to read validation history")
        raise HTTPException(status_code=500, detail="Error fetching validation history")
