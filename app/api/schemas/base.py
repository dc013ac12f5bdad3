"""Base classes shared by every request and response schema.

JSON field names are camelCase on the wire; request bodies also accept the
snake_case attribute names.
"""

from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiSchema(BaseModel):
    """Root of all API schemas."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestSchema(ApiSchema):
    """
    Base for create/update request bodies.

    Subclasses list their display strings in ``trimmed_fields``; the resource
    handler trims them after validation succeeds and before persistence.
    """

    trimmed_fields: ClassVar[tuple[str, ...]] = ()

    def trimmed(self) -> Self:
        """Return a copy with leading/trailing whitespace removed from display strings."""
        updates = {
            name: getattr(self, name).strip()
            for name in self.trimmed_fields
            if name in self.model_fields_set and isinstance(getattr(self, name), str)
        }
        if not updates:
            return self
        return self.model_copy(update=updates)


class ResponseSchema(ApiSchema):
    """Base for entity representations returned to clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
