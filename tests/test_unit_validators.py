"""Unit tests for shared schema validator helpers."""

import pytest

from app.core.validators import field_alias, field_label


class TestFieldLabel:
    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("name", "label"),
        [
            ("name", "Name"),
            ("last_name", "Last name"),
            ("lastName", "Last name"),
            ("completed_at", "Completed at"),
            ("isActive", "Is active"),
        ],
    )
    async def test_labels(self, name, label):
        assert field_label(name) == label


class TestFieldAlias:
    @pytest.mark.anyio
    async def test_snake_case_becomes_camel_case(self):
        assert field_alias("department_id") == "departmentId"

    @pytest.mark.anyio
    async def test_camel_case_is_unchanged(self):
        assert field_alias("proprietorId") == "proprietorId"

    @pytest.mark.anyio
    async def test_single_word_is_unchanged(self):
        assert field_alias("type") == "type"
