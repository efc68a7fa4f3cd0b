"""
Tests for bearer token authentication
"""

from datetime import timedelta

import pytest
from fastapi import HTTPException
from jose import jwt

from translatable.auth import create_access_token, decode_access_token


class TestAccessTokens:
    def test_round_trip(self):
        token = create_access_token({"sub": "translator@example.com"})
        assert decode_access_token(token) == "translator@example.com"

    def test_sub_is_required(self):
        with pytest.raises(ValueError):
            create_access_token({"role": "admin"})

    def test_expired_token(self):
        token = create_access_token({"sub": "translator@example.com"}, expires_delta=timedelta(minutes=-5))
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_foreign_signature(self):
        token = jwt.encode({"sub": "translator@example.com"}, "another-secret", algorithm="HS256")
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.detail == "Invalid token"
