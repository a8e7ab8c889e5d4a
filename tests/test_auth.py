"""
Unit Tests: JWT -> user id resolution
"""
import os
import uuid

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from app.core.auth import get_current_user_id, require_auth

SECRET = os.environ["SUPABASE_JWT_SECRET"]


def _credentials(claims: dict, secret: str = SECRET) -> HTTPAuthorizationCredentials:
    token = jwt.encode(claims, secret, algorithm="HS256")
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUserId:
    def test_guest(self):
        assert get_current_user_id(None) is None

    def test_valid_token(self):
        user_id = uuid.uuid4()
        assert get_current_user_id(_credentials({"sub": str(user_id)})) == user_id

    def test_wrong_secret(self):
        with pytest.raises(HTTPException) as exc:
            get_current_user_id(_credentials({"sub": str(uuid.uuid4())}, "other"))
        assert exc.value.status_code == 401

    @pytest.mark.parametrize("claims", [{}, {"sub": "not-a-uuid"}])
    def test_bad_sub(self, claims):
        with pytest.raises(HTTPException) as exc:
            get_current_user_id(_credentials(claims))
        assert exc.value.status_code == 401


class TestRequireAuth:
    def test_guest_rejected(self):
        with pytest.raises(HTTPException) as exc:
            require_auth(None)
        assert exc.value.status_code == 401

    def test_passes_user_id(self):
        user_id = uuid.uuid4()
        assert require_auth(user_id) == user_id
