"""Tests for the app.scripts.create_user CLI: account creation and rejections."""

import unittest
from unittest.mock import MagicMock, patch

from app.core.security import verify_password
from app.models.user import Role, User
from app.scripts import create_user
from app.services.credentials import CredentialService
from app.services.errors import DuplicateUsernameError

from support import TEST_BCRYPT_ROUNDS, make_session_factory, make_token_service


class TestCreateUserCli(unittest.TestCase):
    def setUp(self) -> None:
        self.Session = make_session_factory()
        fake_settings = MagicMock()
        fake_settings.BCRYPT_ROUNDS = TEST_BCRYPT_ROUNDS
        patchers = [
            patch.object(create_user, "SessionLocal", self.Session),
            patch("app.services.credentials.get_settings", return_value=fake_settings),
            patch.object(
                create_user.TokenService,
                "from_settings",
                return_value=make_token_service(),
            ),
        ]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)

    def _users(self) -> list[tuple[str, str]]:
        with self.Session() as db:
            return [(u.username, u.role) for u in db.query(User).order_by(User.id)]

    def test_creates_admin_account(self) -> None:
        self.assertEqual(create_user.main(["root", "root-password", "admin"]), 0)
        self.assertEqual(self._users(), [("root", Role.ADMIN.value)])
        with self.Session() as db:
            stored = db.query(User).one()
            self.assertTrue(verify_password("root-password", stored.password_hash))

    def test_role_defaults_to_user(self) -> None:
        self.assertEqual(create_user.main(["plain", "plain-password"]), 0)
        self.assertEqual(self._users(), [("plain", Role.USER.value)])

    def test_duplicate_username_rejected(self) -> None:
        self.assertEqual(create_user.main(["root", "root-password", "ADMIN"]), 0)
        self.assertEqual(create_user.main(["root", "other-password", "USER"]), 1)
        self.assertEqual(self._users(), [("root", Role.ADMIN.value)])

    def test_short_password_rejected(self) -> None:
        self.assertEqual(create_user.main(["root", "abc", "ADMIN"]), 1)
        self.assertEqual(self._users(), [])

    def test_username_kept_verbatim_like_registration(self) -> None:
        self.assertEqual(create_user.main([" carol ", "carol-password"]), 0)
        self.assertEqual(self._users(), [(" carol ", Role.USER.value)])
        with self.Session() as db:
            service = CredentialService(
                db, make_token_service(), bcrypt_rounds=TEST_BCRYPT_ROUNDS
            )
            with self.assertRaises(DuplicateUsernameError):
                service.register(" carol ", "carol-password")


if __name__ == "__main__":
    unittest.main()
