"""Tests for app.services.credentials: registration, login and role authorization."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock, patch

from app.core.security import TokenClaims, verify_password
from app.models.user import Role, User
from app.services.credentials import CredentialService, authorize
from app.services.errors import DuplicateUsernameError, InvalidCredentialsError

from support import (
    TEST_BCRYPT_ROUNDS,
    FixedClock,
    add_user,
    make_session_factory,
    make_token_service,
)


class CredentialTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.Session = make_session_factory()
        self.session = self.Session()
        self.clock = FixedClock()
        self.tokens = make_token_service(self.clock)
        self.service = CredentialService(
            self.session, self.tokens, bcrypt_rounds=TEST_BCRYPT_ROUNDS
        )

    def tearDown(self) -> None:
        self.session.close()


class TestRegister(CredentialTestCase):
    def test_creates_user_account_with_hashed_password(self) -> None:
        user = self.service.register("alice", "password123")
        self.assertEqual(user.username, "alice")
        self.assertEqual(user.role, Role.USER.value)
        self.assertNotEqual(user.password_hash, "password123")
        self.assertTrue(verify_password("password123", user.password_hash))

    def test_duplicate_username_fails_and_persists_nothing(self) -> None:
        self.service.register("alice", "password123")
        with self.assertRaises(DuplicateUsernameError):
            self.service.register("alice", "another-password")
        self.assertEqual(self.session.query(User).count(), 1)
        stored = self.session.query(User).one()
        self.assertTrue(verify_password("password123", stored.password_hash))

    def test_username_uniqueness_is_case_sensitive(self) -> None:
        self.service.register("alice", "password123")
        self.service.register("Alice", "password123")
        self.assertEqual(self.session.query(User).count(), 2)

    def test_registration_never_grants_admin(self) -> None:
        add_user(self.session, "root", "rootpass", Role.ADMIN)
        user = self.service.register("newcomer", "password123")
        self.assertEqual(user.role, Role.USER.value)


class TestConfiguredCost(CredentialTestCase):
    """Without an explicit cost the service hashes with the configured BCRYPT_ROUNDS."""

    def test_default_rounds_come_from_settings(self) -> None:
        fake_settings = MagicMock()
        fake_settings.BCRYPT_ROUNDS = 5
        with patch("app.services.credentials.get_settings", return_value=fake_settings):
            service = CredentialService(self.session, self.tokens)
        user = service.register("alice", "password123")
        self.assertTrue(user.password_hash.startswith("$2b$05$"))

    def test_usernames_are_stored_verbatim(self) -> None:
        user = self.service.register(" alice ", "password123")
        self.assertEqual(user.username, " alice ")
        with self.assertRaises(DuplicateUsernameError):
            self.service.create_account(" alice ", "password123", Role.ADMIN)


class TestAuthenticate(CredentialTestCase):
    def setUp(self) -> None:
        super().setUp()
        add_user(self.session, "admin", "admin123", Role.ADMIN)

    def test_success_returns_token_with_username_and_role(self) -> None:
        token, user = self.service.authenticate("admin", "admin123")
        self.assertEqual(user.username, "admin")
        claims = self.service.validate_token(token)
        self.assertEqual(claims.username, "admin")
        self.assertEqual(claims.role, Role.ADMIN)

    def test_wrong_password_and_unknown_user_are_indistinguishable(self) -> None:
        with self.assertRaises(InvalidCredentialsError) as wrong_password:
            self.service.authenticate("admin", "not-the-password")
        with self.assertRaises(InvalidCredentialsError) as unknown_user:
            self.service.authenticate("nobody", "admin123")
        self.assertEqual(wrong_password.exception.message, unknown_user.exception.message)
        self.assertEqual(str(wrong_password.exception), str(unknown_user.exception))

    def test_token_expires_two_hours_after_login(self) -> None:
        token, _ = self.service.authenticate("admin", "admin123")
        self.clock.advance(timedelta(hours=2))
        self.assertIsNotNone(self.service.validate_token(token))
        self.clock.advance(timedelta(microseconds=1))
        self.assertIsNone(self.service.validate_token(token))

    def test_validate_token_returns_none_for_garbage(self) -> None:
        self.assertIsNone(self.service.validate_token("garbage"))


class TestAuthorize(unittest.TestCase):
    """Role checks are exact membership; ADMIN does not inherit USER routes."""

    def _claims(self, role: Role) -> TokenClaims:
        clock = FixedClock()
        return TokenClaims(
            username="u",
            role=role,
            token_id="t",
            issued_at=clock.now,
            expires_at=clock.now + timedelta(hours=2),
        )

    def test_matching_role_allowed(self) -> None:
        self.assertTrue(authorize(self._claims(Role.ADMIN), [Role.ADMIN]))
        self.assertTrue(authorize(self._claims(Role.USER), [Role.USER, Role.ADMIN]))

    def test_admin_denied_on_user_only_route(self) -> None:
        self.assertFalse(authorize(self._claims(Role.ADMIN), [Role.USER]))

    def test_user_denied_on_admin_route(self) -> None:
        self.assertFalse(authorize(self._claims(Role.USER), [Role.ADMIN]))

    def test_no_claims_denied(self) -> None:
        self.assertFalse(authorize(None, [Role.USER, Role.ADMIN]))

    def test_service_delegates_to_authorize(self) -> None:
        self.assertTrue(CredentialService.authorize(self._claims(Role.USER), [Role.USER]))


if __name__ == "__main__":
    unittest.main()
