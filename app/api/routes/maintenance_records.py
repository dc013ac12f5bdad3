"""FastAPI routes for MaintenanceRecord CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from app.api.query import PageQuery
from app.api.schemas.maintenance_record import (
    MaintenanceRecordCreate,
    MaintenanceRecordResponse,
    MaintenanceRecordUpdate,
)
from app.api.schemas.pagination import PagedResponse
from app.core.dependencies import MaintenanceRecordHandler, get_current_user

router = APIRouter(
    prefix="/maintenance-records",
    tags=["Maintenance Records"],
    dependencies=[Depends(get_current_user)],
)

RecordId = Annotated[str, Path(description="Maintenance record identifier")]


@router.get(
    "",
    response_model=PagedResponse[MaintenanceRecordResponse],
    summary="List maintenance records",
)
async def list_maintenance_records(
    query: PageQuery,
    handler: MaintenanceRecordHandler,
    asset_id: Annotated[str | None, Query(alias="assetId")] = None,
):
    return await handler.list(query.with_filters(asset_id=asset_id))


@router.post(
    "",
    response_model=MaintenanceRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a maintenance record",
)
async def create_maintenance_record(
    payload: MaintenanceRecordCreate,
    request: Request,
    response: Response,
    handler: MaintenanceRecordHandler,
):
    created = await handler.create(payload)
    response.headers["Location"] = request.app.url_path_for(
        "get_maintenance_record", record_id=created.id
    )
    return created


@router.get(
    "/{record_id}", response_model=MaintenanceRecordResponse, summary="Get a maintenance record"
)
async def get_maintenance_record(record_id: RecordId, handler: MaintenanceRecordHandler):
    return await handler.show(record_id)


@router.put(
    "/{record_id}",
    response_model=MaintenanceRecordResponse,
    summary="Update a maintenance record",
    description="Send `completedAt` to close the record.",
)
async def update_maintenance_record(
    record_id: RecordId, payload: MaintenanceRecordUpdate, handler: MaintenanceRecordHandler
):
    return await handler.update(record_id, payload)


@router.delete(
    "/{record_id}",
    response_model=MaintenanceRecordResponse,
    summary="Delete a maintenance record",
)
async def delete_maintenance_record(record_id: RecordId, handler: MaintenanceRecordHandler):
    return await handler.delete(record_id)
