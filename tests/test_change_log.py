"""Unit tests for the audit change set and the secret-stripping exposure filter."""

import unittest

from userdesk.services.change_log import SENSITIVE_FIELDS, logged_changes
from userdesk.services.exposure import filter_fields


class TestLoggedChanges(unittest.TestCase):
    """Only changed, non-sensitive fields appear as "before => after"."""

    def test_changed_field(self) -> None:
        changes = logged_changes({"role": "admin"}, {"role": "default"})
        self.assertEqual(changes, {"role": "default => admin"})

    def test_unchanged_field_omitted(self) -> None:
        self.assertEqual(logged_changes({"role": "default"}, {"role": "default"}), {})

    def test_suspended_flag(self) -> None:
        self.assertEqual(logged_changes({"suspended": 1}, {"suspended": 0}), {"suspended": "0 => 1"})

    def test_missing_previous_value(self) -> None:
        self.assertEqual(logged_changes({"pfp_filename": "a.png"}), {"pfp_filename": "None => a.png"})

    def test_password_family_always_omitted(self) -> None:
        updates = {"password": "new-secret", "password_hash": "$2b$04$new", "username": "bob"}
        previous = {"password_hash": "$2b$04$old", "username": "alice"}
        changes = logged_changes(updates, previous)
        self.assertEqual(changes, {"username": "alice => bob"})
        flat = " ".join(list(changes) + list(changes.values()))
        for secret in ("new-secret", "$2b$04$new", "$2b$04$old"):
            self.assertNotIn(secret, flat)

    def test_sensitive_fields(self) -> None:
        self.assertEqual(SENSITIVE_FIELDS, {"password", "password_hash"})


class TestFilterFields(unittest.TestCase):
    """filter_fields removes the hash and leaves every other field untouched."""

    def test_strips_hash(self) -> None:
        record = {"id": 1, "username": "ab", "password_hash": "$2b$", "role": "default"}
        self.assertEqual(filter_fields(record), {"id": 1, "username": "ab", "role": "default"})

    def test_returns_copy(self) -> None:
        record = {"id": 1, "password_hash": "$2b$"}
        filter_fields(record)
        self.assertIn("password_hash", record)


if __name__ == "__main__":
    unittest.main()
