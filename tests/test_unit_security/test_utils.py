"""
Tests for claim helpers in the security module.
"""

import pytest

from app.core.errors import UnauthorizedError
from app.core.security.utils import get_user_sub, get_username


class TestGetUserSub:
    @pytest.mark.anyio
    async def test_get_user_sub(self):
        assert get_user_sub({"sub": "user123"}) == "user123"

    @pytest.mark.anyio
    @pytest.mark.parametrize("payload", [{}, {"sub": ""}, {"sub": None}])
    async def test_get_user_sub_missing(self, payload):
        with pytest.raises(UnauthorizedError):
            get_user_sub(payload)


class TestGetUsername:
    @pytest.mark.anyio
    async def test_prefers_preferred_username(self):
        payload = {"sub": "f3a1", "preferred_username": "jdelacruz"}
        assert get_username(payload) == "jdelacruz"

    @pytest.mark.anyio
    async def test_falls_back_to_subject(self):
        assert get_username({"sub": "f3a1"}) == "f3a1"
