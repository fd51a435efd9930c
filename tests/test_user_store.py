"""Tests for usermanager.services.user_store against in-memory SQLite, plus failure paths with mocks."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from usermanager.core.database import SessionLocal, engine
from usermanager.models import Base, Role
from usermanager.services.user_store import MAX_USER_ID, UserStore


class StoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        self.session = SessionLocal()
        self.store = UserStore(self.session)

    def tearDown(self) -> None:
        self.session.close()

    def _create(self, username: str = "alice", email: str = "a@x.com", role: Role = Role.USER):
        user = self.store.create(username=username, email=email, password_hash="hash-" + username, role=role)
        self.assertIsNotNone(user)
        return user


class TestCreateAndFind(StoreTestCase):
    def test_create_returns_public_record_with_timestamps(self) -> None:
        user = self._create()
        self.assertEqual(user.username, "alice")
        self.assertEqual(user.email, "a@x.com")
        self.assertEqual(user.role, Role.USER)
        self.assertIsNotNone(user.created_at)
        self.assertIsNotNone(user.updated_at)
        self.assertNotIn("password", user.model_dump())
        self.assertNotIn("password_hash", user.model_dump())

    def test_default_role_is_user(self) -> None:
        user = self.store.create(username="bob", email="b@x.com", password_hash="h")
        self.assertEqual(user.role, Role.USER)

    def test_find_by_id_excludes_hash(self) -> None:
        user = self._create()
        found = self.store.find_by_id(user.id)
        self.assertEqual(found.username, "alice")
        self.assertFalse(hasattr(found, "password_hash"))

    def test_credential_lookups_include_hash(self) -> None:
        self._create()
        by_name = self.store.find_by_username("alice")
        by_email = self.store.find_by_email("a@x.com")
        self.assertEqual(by_name.password_hash, "hash-alice")
        self.assertEqual(by_email.password_hash, "hash-alice")

    def test_not_found_values(self) -> None:
        self.assertIsNone(self.store.find_by_id(999))
        self.assertIsNone(self.store.find_by_username("nobody"))
        self.assertIsNone(self.store.find_by_email("nobody@x.com"))

    def test_get_all_and_count(self) -> None:
        self._create("alice", "a@x.com")
        self._create("bob", "b@x.com", Role.ADMIN)
        users = self.store.get_all()
        self.assertEqual([u.username for u in users], ["alice", "bob"])
        self.assertEqual(self.store.count(), 2)


class TestUniqueness(StoreTestCase):
    """The table constraints reject duplicates; the store turns that into None."""

    def test_duplicate_username_returns_none(self) -> None:
        self._create("alice", "a@x.com")
        self.assertIsNone(
            self.store.create(username="alice", email="other@x.com", password_hash="h")
        )
        self.assertEqual(self.store.count(), 1)

    def test_duplicate_email_returns_none(self) -> None:
        self._create("alice", "a@x.com")
        self.assertIsNone(self.store.create(username="other", email="a@x.com", password_hash="h"))

    def test_store_usable_after_constraint_failure(self) -> None:
        self._create("alice", "a@x.com")
        self.store.create(username="alice", email="a@x.com", password_hash="h")
        self.assertIsNotNone(self._create("bob", "b@x.com"))


class TestUpdate(StoreTestCase):
    def test_partial_update_changes_only_supplied_fields(self) -> None:
        user = self._create()
        updated = self.store.update(user.id, email="new@x.com")
        self.assertEqual(updated.email, "new@x.com")
        self.assertEqual(updated.username, "alice")
        self.assertEqual(self.store.find_by_username("alice").password_hash, "hash-alice")

    def test_password_update(self) -> None:
        user = self._create()
        self.store.update(user.id, password_hash="new-hash")
        self.assertEqual(self.store.find_by_username("alice").password_hash, "new-hash")

    def test_nothing_to_update_returns_none(self) -> None:
        user = self._create()
        self.assertIsNone(self.store.update(user.id))
        self.assertIsNone(self.store.update(user.id, username="", email=None))

    def test_missing_user_returns_none(self) -> None:
        self.assertIsNone(self.store.update(42, username="ghost"))
        self.assertIsNone(self.store.update_role(42, Role.ADMIN))

    def test_update_to_taken_username_returns_none(self) -> None:
        self._create("alice", "a@x.com")
        bob = self._create("bob", "b@x.com")
        self.assertIsNone(self.store.update(bob.id, username="alice"))
        self.assertEqual(self.store.find_by_id(bob.id).username, "bob")

    def test_update_role(self) -> None:
        user = self._create()
        updated = self.store.update_role(user.id, Role.ADMIN)
        self.assertEqual(updated.role, Role.ADMIN)
        self.assertEqual(self.store.find_by_id(user.id).role, Role.ADMIN)


class TestDelete(StoreTestCase):
    def test_delete_existing(self) -> None:
        user = self._create()
        self.assertTrue(self.store.delete(user.id))
        self.assertIsNone(self.store.find_by_id(user.id))

    def test_delete_missing(self) -> None:
        self.assertFalse(self.store.delete(123))


class TestIdRange(unittest.TestCase):
    """Ids the users.id column cannot hold never reach the database driver."""

    def test_out_of_range_ids_short_circuit(self) -> None:
        session = MagicMock()
        store = UserStore(session)
        for user_id in (0, -1, 2**31, 10**23):
            with self.subTest(user_id=user_id):
                self.assertIsNone(store.find_by_id(user_id))
                self.assertIsNone(store.update(user_id, username="ghost"))
                self.assertIsNone(store.update_role(user_id, Role.ADMIN))
                self.assertFalse(store.delete(user_id))
        session.get.assert_not_called()
        session.rollback.assert_not_called()

    def test_largest_storable_id_is_looked_up(self) -> None:
        session = MagicMock()
        session.get.return_value = None
        self.assertIsNone(UserStore(session).find_by_id(MAX_USER_ID))
        session.get.assert_called_once()


class TestDatabaseFailures(unittest.TestCase):
    """Driver errors never escape: neutral values are returned and the session rolled back."""

    def setUp(self) -> None:
        self.session = MagicMock()
        error = OperationalError("SELECT 1", {}, Exception("connection lost"))
        self.session.scalars.side_effect = error
        self.session.scalar.side_effect = error
        self.session.get.side_effect = error
        self.session.commit.side_effect = error
        self.store = UserStore(self.session)

    def test_reads_return_neutral_values(self) -> None:
        with self.assertLogs("usermanager.services.user_store", level="ERROR"):
            self.assertEqual(self.store.get_all(), [])
            self.assertEqual(self.store.count(), 0)
            self.assertIsNone(self.store.find_by_id(1))
            self.assertIsNone(self.store.find_by_username("alice"))
            self.assertIsNone(self.store.find_by_email("a@x.com"))
        self.assertTrue(self.session.rollback.called)

    def test_writes_return_neutral_values(self) -> None:
        with self.assertLogs("usermanager.services.user_store", level="ERROR"):
            self.assertIsNone(self.store.create(username="a", email="a@x.com", password_hash="h"))
            self.assertIsNone(self.store.update(1, username="b"))
            self.assertIsNone(self.store.update_role(1, Role.ADMIN))
            self.assertFalse(self.store.delete(1))
        self.assertEqual(self.session.rollback.call_count, 4)


if __name__ == "__main__":
    unittest.main()
