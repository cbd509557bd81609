"""Unit tests for news_api.services.auth_gate: authenticate and authorize_admin outcomes."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt
from sqlalchemy.exc import OperationalError

from news_api.core.security import create_access_token
from news_api.models import Role
from news_api.services.auth_gate import Identity, authenticate, authorize_admin
from news_api.services.results import Failure, FailureKind, Success
from tests.support import make_settings


class TestAuthenticate(unittest.TestCase):
    """authenticate maps each token condition to exactly one outcome."""

    def setUp(self) -> None:
        self.settings = make_settings()

    def _sign(self, claims: dict[str, object]) -> str:
        claims = {"exp": datetime.now(UTC) + timedelta(minutes=5), **claims}
        return jwt.encode(claims, self.settings.JWT_SECRET.get_secret_value(), algorithm="HS256")

    def test_missing_token_is_access_denied(self) -> None:
        for token in (None, ""):
            result = authenticate(token, self.settings)
            self.assertIsInstance(result, Failure)
            self.assertEqual(result.kind, FailureKind.ACCESS_DENIED)

    def test_malformed_token_is_invalid(self) -> None:
        result = authenticate("not.a.jwt", self.settings)
        self.assertEqual(result.kind, FailureKind.INVALID_TOKEN)

    def test_expired_token_is_invalid(self) -> None:
        token = create_access_token(7, self.settings, now=datetime.now(UTC) - timedelta(hours=1, seconds=5))
        result = authenticate(token, self.settings)
        self.assertEqual(result.kind, FailureKind.INVALID_TOKEN)

    def test_non_integer_id_claim_is_invalid(self) -> None:
        for bad in ("7", 7.5, True, None):
            result = authenticate(self._sign({"id": bad}), self.settings)
            self.assertIsInstance(result, Failure, msg=repr(bad))
            self.assertEqual(result.kind, FailureKind.INVALID_TOKEN)

    def test_valid_token_yields_identity(self) -> None:
        result = authenticate(create_access_token(7, self.settings), self.settings)
        self.assertEqual(result, Success(Identity(user_id=7)))


class TestAuthorizeAdmin(unittest.TestCase):
    """authorize_admin does a single lookup and admits only stored ADMIN role."""

    def test_admin_is_admitted(self) -> None:
        db = MagicMock()
        db.get.return_value = MagicMock(role=Role.ADMIN)
        identity = Identity(user_id=3)
        result = authorize_admin(identity, db)
        self.assertEqual(result, Success(identity))
        db.get.assert_called_once()

    def test_plain_user_is_refused(self) -> None:
        db = MagicMock()
        db.get.return_value = MagicMock(role=Role.USER)
        result = authorize_admin(Identity(user_id=3), db)
        self.assertEqual(result.kind, FailureKind.ADMIN_REQUIRED)

    def test_missing_user_is_refused(self) -> None:
        db = MagicMock()
        db.get.return_value = None
        result = authorize_admin(Identity(user_id=99), db)
        self.assertEqual(result.kind, FailureKind.ADMIN_REQUIRED)

    def test_store_error_is_store_failure(self) -> None:
        db = MagicMock()
        db.get.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))
        result = authorize_admin(Identity(user_id=3), db)
        self.assertEqual(result.kind, FailureKind.STORE_FAILURE)


if __name__ == "__main__":
    unittest.main()
