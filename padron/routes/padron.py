"""
/api/padron -- Electoral registry CRUD.

Records live in the in-memory store and are lost on restart.
CURP and INE number are unique; a clash returns 409.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from padron.deps import get_store
from padron.models.schemas import (
    DeleteResponse,
    ErrorResponse,
    RecordStatus,
    RegistryRecord,
    RegistryRecordCreate,
    RegistryRecordUpdate,
)
from padron.store import RegistryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/padron", tags=["Registry"])

NOT_FOUND = "Electoral record not found"


@router.get(
    "",
    response_model=list[RegistryRecord],
    summary="List registry records",
    responses={500: {"model": ErrorResponse}},
)
async def list_records(
    state: str | None = Query(default=None, description="Only records from this state."),
    status: RecordStatus | None = Query(default=None, description="Only active or inactive records."),
    store: RegistryStore = Depends(get_store),
) -> list[RegistryRecord]:
    try:
        return store.list_records(state=state, status=status)
    except Exception:
        logger.exception("Failed to list registry records")
        raise HTTPException(status_code=500, detail="Error fetching electoral registry")


@router.get(
    "/{record_id}",
    response_model=RegistryRecord,
    summary="Get one registry record",
    responses={404: {"model": ErrorResponse}},
)
async def get_record(record_id: int, store: RegistryStore = Depends(get_store)) -> RegistryRecord:
    record = store.get_record(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return record


@router.post(
    "",
    response_model=RegistryRecord,
    status_code=201,
    summary="Add a citizen to the registry",
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_record(
    body: RegistryRecordCreate,
    store: RegistryStore = Depends(get_store),
) -> RegistryRecord:
    record = store.create_record(body)
    logger.info("Created registry record %d (%s)", record.id, record.curp)
    return record


@router.put(
    "/{record_id}",
    response_model=RegistryRecord,
    summary="Update a registry record",
    description="Partial update: only the fields present in the body change.",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_record(
    record_id: int,
    body: RegistryRecordUpdate,
    store: RegistryStore = Depends(get_store),
) -> RegistryRecord:
    record = store.update_record(record_id, body)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("Updated registry record %d", record_id)
    return record


@router.delete(
    "/{record_id}",
    response_model=DeleteResponse,
    summary="Remove a registry record",
    responses={404: {"model": ErrorResponse}},
)
async def delete_record(record_id: int, store: RegistryStore = Depends(get_store)) -> DeleteResponse:
    if not store.delete_record(record_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("Deleted registry record %d", record_id)
    return DeleteResponse(success=True)
