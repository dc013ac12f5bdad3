"""
Request flow shared by every resource endpoint.

The handler sits between the routes and the repository: it checks the path
identifier, trims request bodies, turns repository "not found" results into
domain errors, and maps entities onto response schemas.
"""

import logging
from typing import NoReturn

from app.api.mappers import to_paged_response, to_response, trim_request
from app.api.query import QueryObject
from app.api.schemas.base import RequestSchema, ResponseSchema
from app.api.schemas.pagination import PagedResponse
from app.core.errors import NotFoundError, ValidationError
from app.core.observability import metrics
from app.db.models import TimestampedEntity
from app.repos.base import CrudRepository

logger = logging.getLogger(__name__)

INVALID_ID_MSG = "Null or invalid id"


class ResourceHandler[
    ModelT: TimestampedEntity,
    CreateT: RequestSchema,
    UpdateT: RequestSchema,
    ResponseT: ResponseSchema,
]:
    """CRUD request handling for one resource."""

    def __init__(
        self,
        repo: CrudRepository[ModelT, CreateT, UpdateT],
        response_schema: type[ResponseT],
    ) -> None:
        self.repo = repo
        self.response_schema = response_schema
        self.resource = repo.resource

    async def list(self, query: QueryObject) -> PagedResponse[ResponseT]:
        result = await self.repo.get_all(query)
        self._record("list", "ok")
        return to_paged_response(
            page_number=result.page_number,
            page_size=result.page_size,
            item_count=result.item_count,
            data=result.data,
            schema=self.response_schema,
        )

    async def create(self, dto: CreateT) -> ResponseT:
        """
        Create an entity from a validated body.

        Raises:
            ValidationError: If the repository could not create the entity
        """
        try:
            entity = await self.repo.create(trim_request(dto))
        except ValidationError:
            self._record("create", "invalid")
            raise
        if entity is None:
            self._record("create", "invalid")
            raise ValidationError(
                f"Unable to create {self.resource}.",
                details={
                    "body": ["A referenced entity does not exist or the record conflicts."]
                },
            )
        self._record("create", "ok")
        return to_response(entity, self.response_schema)

    async def show(self, entity_id: str) -> ResponseT:
        self._require_id(entity_id, "show")
        entity = await self.repo.get_by_id(entity_id)
        if entity is None:
            self._not_found(entity_id, "show")
        logger.debug(
            f"Fetched {self.resource}: {entity_id}",
            extra={"resource": self.resource, "entity_id": entity_id},
        )
        self._record("show", "ok")
        return to_response(entity, self.response_schema)

    async def update(self, entity_id: str, dto: UpdateT) -> ResponseT:
        """
        Apply a partial update.

        Raises:
            ValidationError: Blank id or unresolved reference
            NotFoundError: No entity has this id
        """
        self._require_id(entity_id, "update")
        try:
            entity = await self.repo.update(entity_id, trim_request(dto))
        except ValidationError:
            self._record("update", "invalid")
            raise
        if entity is None:
            self._not_found(entity_id, "update")
        self._record("update", "ok")
        return to_response(entity, self.response_schema)

    async def delete(self, entity_id: str) -> ResponseT:
        """Delete an entity and return its last-known representation."""
        self._require_id(entity_id, "delete")
        entity = await self.repo.delete(entity_id)
        if entity is None:
            self._not_found(entity_id, "delete")
        self._record("delete", "ok")
        return to_response(entity, self.response_schema)

    def _require_id(self, entity_id: str, operation: str) -> None:
        if not entity_id or not entity_id.strip():
            self._record(operation, "invalid")
            raise ValidationError(INVALID_ID_MSG, details={"id": [INVALID_ID_MSG]})

    def _not_found(self, entity_id: str, operation: str) -> NoReturn:
        self._record(operation, "not_found")
        logger.warning(
            f"{self.resource} not found: {entity_id}",
            extra={"resource": self.resource, "entity_id": entity_id, "operation": operation},
        )
        raise NotFoundError("Resource not found")

    def _record(self, operation: str, outcome: str) -> None:
        metrics.resource_operations_total.labels(
            resource=self.resource, operation=operation, outcome=outcome
        ).inc()
