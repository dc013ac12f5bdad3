"""Shared validators for Pydantic request schemas."""

import re
from typing import Any

from pydantic import ValidationInfo
from pydantic.alias_generators import to_camel


def field_label(name: str) -> str:
    """Human label for a field: ``last_name`` or ``lastName`` -> ``Last name``."""
    spaced = re.sub(r"(?<!^)(?=[A-Z])", " ", name).replace("_", " ")
    return spaced.lower().capitalize()


def require_text(value: str | None, info: ValidationInfo) -> str | None:
    """
    Validate that a required text field is present and not blank.

    The check runs on the raw value but ignores surrounding whitespace, so
    trimming can never reduce an accepted value to the empty string.

    Raises:
        ValueError: If the value is null, empty or only whitespace
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{field_label(info.field_name)} is required.")
    return value


def reject_null(value: Any, info: ValidationInfo) -> Any:
    """
    Validate that an explicitly supplied value is not null.

    Used on partial-update schemas for columns that cannot be cleared.
    Omitted fields never reach this validator.
    """
    if value is None:
        raise ValueError(f"{field_label(info.field_name)} cannot be null.")
    return value


def field_alias(field_name: str) -> str:
    """Wire name of a schema field, used as key in validation error maps."""
    return to_camel(field_name) if "_" in field_name else field_name
