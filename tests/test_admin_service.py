"""Tests for app.services.admin: user list/deletion and statistics aggregation."""

import unittest

from app.models import Role, User
from app.services import admin as admin_service
from app.services.errors import NotFoundError

from support import add_car, add_owner, add_user, make_session_factory


class TestAdminService(unittest.TestCase):
    def setUp(self) -> None:
        self.Session = make_session_factory()
        self.session = self.Session()

    def tearDown(self) -> None:
        self.session.close()

    def test_stats_on_empty_database(self) -> None:
        stats = admin_service.collect_stats(self.session)
        self.assertEqual(
            (stats.total_cars, stats.total_owners, stats.total_users), (0, 0, 0)
        )
        self.assertEqual(stats.cars_by_brand, [])

    def test_stats_group_cars_by_brand(self) -> None:
        john = add_owner(self.session, "John", "Johnson")
        mary = add_owner(self.session, "Mary", "Robinson")
        add_car(self.session, john, brand="Ford", model="Mustang")
        add_car(self.session, mary, brand="Nissan", model="Leaf")
        add_car(self.session, mary, brand="Toyota", model="Prius")
        add_car(self.session, john, brand="Toyota", model="Corolla")
        add_user(self.session, "admin", "admin123", Role.ADMIN)

        stats = admin_service.collect_stats(self.session)
        self.assertEqual(stats.total_cars, 4)
        self.assertEqual(stats.total_owners, 2)
        self.assertEqual(stats.total_users, 1)
        self.assertEqual(
            [(b.brand, b.count) for b in stats.cars_by_brand],
            [("Ford", 1), ("Nissan", 1), ("Toyota", 2)],
        )

    def test_list_and_delete_user(self) -> None:
        alice = add_user(self.session, "alice", "password1")
        add_user(self.session, "bob", "password2")
        self.assertEqual(
            [u.username for u in admin_service.list_users(self.session)], ["alice", "bob"]
        )
        admin_service.delete_user(self.session, alice.id)
        self.assertEqual(
            [u.username for u in self.session.query(User).all()], ["bob"]
        )

    def test_delete_unknown_user(self) -> None:
        with self.assertRaises(NotFoundError):
            admin_service.delete_user(self.session, 404)


if __name__ == "__main__":
    unittest.main()
