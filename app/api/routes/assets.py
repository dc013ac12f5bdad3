"""
FastAPI routes for Asset CRUD operations.

An asset's owner is a Department (``proprietorId``) and its holder an
Employee (``custodianId``). Both are validated on create and update.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from app.api.query import PageQuery
from app.api.schemas.asset import AssetCreate, AssetResponse, AssetUpdate
from app.api.schemas.pagination import PagedResponse
from app.core.dependencies import AssetHandler, get_current_user

router = APIRouter(
    prefix="/assets",
    tags=["Assets"],
    dependencies=[Depends(get_current_user)],
)

AssetId = Annotated[str, Path(description="Asset identifier")]


@router.get(
    "",
    response_model=PagedResponse[AssetResponse],
    summary="List assets",
    description="""
    Page through assets ordered by creation time.

    **Filters:**
    - `proprietorId`: owning department
    - `custodianId`: employee holding the asset
    - `isActive`: active or retired assets only
    """,
)
async def list_assets(
    query: PageQuery,
    handler: AssetHandler,
    proprietor_id: Annotated[str | None, Query(alias="proprietorId")] = None,
    custodian_id: Annotated[str | None, Query(alias="custodianId")] = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
):
    return await handler.list(
        query.with_filters(
            proprietor_id=proprietor_id, custodian_id=custodian_id, is_active=is_active
        )
    )


@router.post(
    "",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an asset",
)
async def create_asset(
    payload: AssetCreate,
    request: Request,
    response: Response,
    handler: AssetHandler,
):
    created = await handler.create(payload)
    response.headers["Location"] = request.app.url_path_for("get_asset", asset_id=created.id)
    return created


@router.get("/{asset_id}", response_model=AssetResponse, summary="Get an asset")
async def get_asset(asset_id: AssetId, handler: AssetHandler):
    return await handler.show(asset_id)


@router.put("/{asset_id}", response_model=AssetResponse, summary="Update an asset")
async def update_asset(asset_id: AssetId, payload: AssetUpdate, handler: AssetHandler):
    return await handler.update(asset_id, payload)


@router.delete(
    "/{asset_id}",
    response_model=AssetResponse,
    summary="Delete an asset",
    description="Deleting an asset also removes its transactions and maintenance records.",
)
async def delete_asset(asset_id: AssetId, handler: AssetHandler):
    return await handler.delete(asset_id)
