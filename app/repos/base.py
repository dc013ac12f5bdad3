"""
Generic CRUD repository shared by every resource.

Each resource subclass declares its ORM model, the columns list endpoints may
filter on, and the foreign-key columns whose targets must exist. Repositories
are constructed per request around that request's AsyncSession.

All methods are async - use AsyncSession from SQLAlchemy.
"""

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.mappers import to_field_values
from app.api.query import QueryObject
from app.api.schemas.base import RequestSchema
from app.core.config import settings
from app.core.errors import ValidationError
from app.core.observability import db_metrics
from app.core.validators import field_alias
from app.db.models import TimestampedEntity

logger = logging.getLogger(__name__)


@dataclass
class PagedResult[T]:
    """One page of entities plus the total number of matching rows."""

    page_number: int
    page_size: int
    item_count: int
    data: list[T]


class CrudRepository[ModelT: TimestampedEntity, CreateT: RequestSchema, UpdateT: RequestSchema]:
    """
    Create/read/update/delete operations for a single resource table.

    Subclasses set:
        model: ORM model class
        resource: Resource name used in logs and metrics
        filterable: Columns accepted as equality filters on list queries
        references: Foreign-key column -> model that must contain the referenced id
    """

    model: ClassVar[type[TimestampedEntity]]
    resource: ClassVar[str]
    filterable: ClassVar[frozenset[str]] = frozenset()
    references: ClassVar[dict[str, type[TimestampedEntity]]] = {}

    def __init__(self, db: AsyncSession, default_page_size: int | None = None) -> None:
        self.db = db
        self.default_page_size = default_page_size or settings.pagination_default_page_size

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self, query: QueryObject | None = None) -> PagedResult[ModelT]:
        """
        Return one page of entities ordered by creation time.

        Args:
            query: Normalized paging/filter parameters; None means defaults

        Returns:
            PagedResult whose page_number/page_size are the values applied
        """
        query = query or QueryObject()
        page_number = query.page_number or 1
        page_size = query.page_size or self.default_page_size

        conditions = [
            getattr(self.model, column) == value
            for column, value in query.filters.items()
            if column in self.filterable
        ]

        count_stmt = select(func.count()).select_from(self.model).where(*conditions)
        rows_stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(self.model.created_at, self.model.id)
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        )

        with db_metrics.track(f"{self.resource}.list"):
            item_count = (await self.db.execute(count_stmt)).scalar_one()
            data = list((await self.db.execute(rows_stmt)).scalars().all())

        logger.debug(
            f"Listed {len(data)} of {item_count} {self.resource}",
            extra={"resource": self.resource, "page_number": page_number, "page_size": page_size},
        )
        return PagedResult(
            page_number=page_number, page_size=page_size, item_count=item_count, data=data
        )

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        """Return the entity with the given id, or None if it does not exist."""
        with db_metrics.track(f"{self.resource}.get"):
            return await self.db.get(self.model, entity_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, dto: CreateT) -> ModelT | None:
        """
        Insert a new entity.

        Returns:
            The created entity, or None when a referenced entity does not exist
            or the database rejects the row
        """
        values = to_field_values(dto, partial=False)

        missing = await self._missing_references(values)
        if missing:
            logger.warning(
                f"Rejected {self.resource} create: unresolved reference",
                extra={"resource": self.resource, "fields": sorted(missing)},
            )
            return None

        entity = self.model(**values)
        self.check_invariants(entity)
        self.db.add(entity)

        try:
            with db_metrics.track(f"{self.resource}.create"):
                await self._commit()
        except IntegrityError as e:
            logger.warning(
                f"Integrity error creating {self.resource}",
                extra={"resource": self.resource, "error": str(e.orig)},
            )
            return None

        logger.info(
            f"Created {self.resource}: {entity.id}",
            extra={"resource": self.resource, "entity_id": entity.id},
        )
        return entity

    async def update(self, entity_id: str, dto: UpdateT) -> ModelT | None:
        """
        Apply a partial update. Only fields present in the request are written.

        Returns:
            The updated entity, or None if no entity has this id

        Raises:
            ValidationError: If a referenced entity does not exist or the
                resulting row violates a constraint
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return None

        values = to_field_values(dto, partial=True)

        missing = await self._missing_references(values)
        if missing:
            raise ValidationError.for_fields(missing)

        for key, value in values.items():
            setattr(entity, key, value)
        self.check_invariants(entity)

        try:
            with db_metrics.track(f"{self.resource}.update"):
                await self._commit()
        except IntegrityError as e:
            logger.warning(
                f"Integrity error updating {self.resource}: {entity_id}",
                extra={"resource": self.resource, "entity_id": entity_id, "error": str(e.orig)},
            )
            raise ValidationError(
                f"The {self.resource} record could not be saved.",
                details={"id": ["The update violates a database constraint."]},
            ) from e

        logger.info(
            f"Updated {self.resource}: {entity_id}",
            extra={"resource": self.resource, "entity_id": entity_id, "fields": sorted(values)},
        )
        return entity

    async def delete(self, entity_id: str) -> ModelT | None:
        """
        Delete an entity.

        Returns:
            The deleted entity's final state, or None if no entity has this id
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return None

        await self.db.delete(entity)
        with db_metrics.track(f"{self.resource}.delete"):
            await self._commit()

        logger.info(
            f"Deleted {self.resource}: {entity_id}",
            extra={"resource": self.resource, "entity_id": entity_id},
        )
        return entity

    # ------------------------------------------------------------------
    # Hooks and helpers
    # ------------------------------------------------------------------

    def check_invariants(self, entity: ModelT) -> None:
        """Validate cross-field rules on the entity about to be written.

        Raise ValidationError to reject the write. Default: no rules.
        """

    async def _missing_references(self, values: dict[str, Any]) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}
        for column, target in self.references.items():
            ref_id = values.get(column)
            if ref_id is None:
                continue
            if await self.db.get(target, ref_id) is None:
                errors[field_alias(column)] = [f"{target.__name__} '{ref_id}' does not exist."]
        return errors

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
