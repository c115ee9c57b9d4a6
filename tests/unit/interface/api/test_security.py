"""Unit tests for request identity helpers."""

import pytest
from fastapi import HTTPException

from discuss.config import AuthSettings
from discuss.domain.service import JWTService
from discuss.interface.api.security import read_token, require_actor
from tests.conftest import make_actor


class TestReadToken:
    def test_bearer_header_wins_over_cookie(self):
        assert read_token(auth_token="cookie", authorization="Bearer header") == "header"

    def test_cookie_used_without_header(self):
        assert read_token(auth_token="cookie", authorization=None) == "cookie"

    def test_non_bearer_scheme_falls_back_to_cookie(self):
        assert read_token(auth_token=None, authorization="Basic abc") is None


class TestRequireActor:
    def test_valid_token_resolves_actor(self):
        service = JWTService(AuthSettings(jwt_secret="test-secret"))
        actor = make_actor()

        assert require_actor(service, service.create_token(actor), "vote") == actor

    def test_missing_token_is_401(self):
        service = JWTService(AuthSettings(jwt_secret="test-secret"))

        with pytest.raises(HTTPException) as exc_info:
            require_actor(service, None, "vote")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Authentication required to vote"
