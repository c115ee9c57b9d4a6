"""Unit tests for JWT helpers and JWTService."""

from uuid import uuid4

import jwt
import pytest

from discuss.config import AuthSettings
from discuss.domain.service import JWTService
from discuss.domain.value import Actor, Role, UserId
from discuss.util.jwt import JWTError, create_token, verify_token


class TestTokens:
    def test_round_trip_keeps_role(self):
        # Arrange
        settings = AuthSettings(jwt_secret="test-secret")
        user_id = str(uuid4())

        # Act
        payload = verify_token(
            create_token(user_id, settings, role=Role.MODERATOR, username="ada"),
            settings,
        )

        # Assert
        assert payload.user_id == user_id
        assert payload.role == Role.MODERATOR
        assert payload.username == "ada"

    def test_wrong_secret_is_rejected(self):
        token = create_token(str(uuid4()), AuthSettings(jwt_secret="one"))

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="two"))

    def test_expired_token_is_rejected(self):
        settings = AuthSettings(jwt_secret="test-secret", jwt_expiry_days=-1)
        token = create_token(str(uuid4()), settings)

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, settings)

    def test_missing_role_defaults_to_user(self):
        # Tokens from the identity provider may omit the role claim
        settings = AuthSettings(jwt_secret="test-secret")
        token = jwt.encode(
            {"user_id": str(uuid4()), "exp": 4102444800}, "test-secret", "HS256"
        )

        assert verify_token(token, settings).role == Role.USER


class TestJWTService:
    def test_get_actor_from_token(self):
        # Arrange
        service = JWTService(AuthSettings(jwt_secret="test-secret"))
        actor = Actor(user_id=UserId(uuid4()), role=Role.ADMIN)

        # Act
        resolved = service.get_actor_from_token(service.create_token(actor))

        # Assert
        assert resolved == actor

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_bad_tokens_mean_unauthenticated(self, token):
        service = JWTService(AuthSettings(jwt_secret="test-secret"))

        assert service.get_actor_from_token(token) is None
