"""FastAPI routes for asset Transaction CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from app.api.query import PageQuery
from app.api.schemas.pagination import PagedResponse
from app.api.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from app.core.dependencies import TransactionHandler, get_current_user
from app.domain.enums import TransactionType

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
    dependencies=[Depends(get_current_user)],
)

TransactionId = Annotated[str, Path(description="Transaction identifier")]


@router.get(
    "",
    response_model=PagedResponse[TransactionResponse],
    summary="List transactions",
    description="Page through transactions; filter by asset, employee, department or type.",
)
async def list_transactions(
    query: PageQuery,
    handler: TransactionHandler,
    asset_id: Annotated[str | None, Query(alias="assetId")] = None,
    employee_id: Annotated[str | None, Query(alias="employeeId")] = None,
    department_id: Annotated[str | None, Query(alias="departmentId")] = None,
    type: Annotated[TransactionType | None, Query()] = None,
):
    return await handler.list(
        query.with_filters(
            asset_id=asset_id, employee_id=employee_id, department_id=department_id, type=type
        )
    )


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a transaction",
)
async def create_transaction(
    payload: TransactionCreate,
    request: Request,
    response: Response,
    handler: TransactionHandler,
):
    created = await handler.create(payload)
    response.headers["Location"] = request.app.url_path_for(
        "get_transaction", transaction_id=created.id
    )
    return created


@router.get("/{transaction_id}", response_model=TransactionResponse, summary="Get a transaction")
async def get_transaction(transaction_id: TransactionId, handler: TransactionHandler):
    return await handler.show(transaction_id)


@router.put(
    "/{transaction_id}", response_model=TransactionResponse, summary="Update a transaction"
)
async def update_transaction(
    transaction_id: TransactionId, payload: TransactionUpdate, handler: TransactionHandler
):
    return await handler.update(transaction_id, payload)


@router.delete(
    "/{transaction_id}", response_model=TransactionResponse, summary="Delete a transaction"
)
async def delete_transaction(transaction_id: TransactionId, handler: TransactionHandler):
    return await handler.delete(transaction_id)
