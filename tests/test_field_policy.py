"""Unit tests for userdesk.services.field_policy: writable set, coercion, validation."""

import unittest

from userdesk.services.errors import ValidationError
from userdesk.services.field_policy import (
    FIELD_POLICY,
    WRITABLE_FIELDS,
    Coercion,
    FieldDescriptor,
    coerce,
    is_truthy,
    is_writable,
    project_writable,
    validate,
    validate_fields,
    validate_username,
)


class TestWritableFields(unittest.TestCase):
    """The writable set is closed and fixed at import time."""

    def test_writable_set(self) -> None:
        self.assertEqual(
            WRITABLE_FIELDS,
            {"username", "password", "pfp_filename", "role", "suspended"},
        )

    def test_internal_fields_not_writable(self) -> None:
        for key in ("id", "password_hash", "seen_recovery_codes", "created_at"):
            self.assertFalse(is_writable(key), key)

    def test_policy_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            FIELD_POLICY["bio"] = FieldDescriptor()  # type: ignore[index]


class TestTruthiness(unittest.TestCase):
    """None, False, 0 and "" are false; everything else is true."""

    def test_falsy_values(self) -> None:
        for value in (None, False, 0, 0.0, ""):
            self.assertFalse(is_truthy(value), repr(value))

    def test_truthy_values(self) -> None:
        for value in (True, 1, -1, "true", "false", "0", " ", [], {}):
            self.assertTrue(is_truthy(value), repr(value))


class TestCoerce(unittest.TestCase):
    """suspended is stored as 0/1; other writable fields as strings."""

    def test_suspended_true_string(self) -> None:
        self.assertEqual(coerce("suspended", "true"), 1)

    def test_suspended_empty_string(self) -> None:
        self.assertEqual(coerce("suspended", ""), 0)

    def test_suspended_bool(self) -> None:
        self.assertEqual(coerce("suspended", True), 1)
        self.assertEqual(coerce("suspended", False), 0)

    def test_string_fields(self) -> None:
        self.assertEqual(coerce("role", 42), "42")
        self.assertEqual(coerce("pfp_filename", "me.png"), "me.png")

    def test_none_becomes_empty_string(self) -> None:
        self.assertEqual(coerce("username", None), "")


class TestUsernameValidation(unittest.TestCase):
    """Usernames must be 2-100 characters after coercion."""

    def test_boundaries_accepted(self) -> None:
        for length in (2, 50, 100):
            self.assertEqual(validate_username("a" * length), "a" * length)

    def test_too_short(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_username("a")
        self.assertIn("at least 2 characters", ctx.exception.message)
        self.assertEqual(ctx.exception.field, "username")

    def test_too_long(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_username("a" * 101)
        self.assertIn("longer than 100 characters", ctx.exception.message)

    def test_validate_dispatches_to_username_only(self) -> None:
        self.assertEqual(validate("role", "x"), "x")
        with self.assertRaises(ValidationError):
            validate("username", "x")


class TestProjectAndValidate(unittest.TestCase):
    """Projection drops unknown keys silently; validation is all-or-nothing."""

    def test_drops_non_writable_keys(self) -> None:
        raw = {"id": 7, "password_hash": "x", "role": "admin", "extra": True}
        self.assertEqual(project_writable(raw), {"role": "admin"})

    def test_does_not_mutate_input(self) -> None:
        raw = {"suspended": "yes", "bogus": 1}
        project_writable(raw)
        self.assertEqual(raw, {"suspended": "yes", "bogus": 1})

    def test_only_non_writable_keys_yields_empty(self) -> None:
        self.assertEqual(project_writable({"id": 1, "created_at": "now"}), {})

    def test_first_validation_failure_raises(self) -> None:
        with self.assertRaises(ValidationError):
            validate_fields({"role": "admin", "username": "a"})

    def test_custom_validator_without_pipeline_changes(self) -> None:
        def no_spaces(value: str) -> str:
            if " " in value:
                raise ValidationError("Role cannot contain spaces", field="role")
            return value

        policy = dict(FIELD_POLICY)
        policy["role"] = FieldDescriptor(Coercion.STRING, no_spaces)
        fields = project_writable({"role": "super admin"}, policy)
        with self.assertRaises(ValidationError):
            validate_fields(fields, policy)
        self.assertEqual(validate_fields({"role": "admin"}, policy), {"role": "admin"})


if __name__ == "__main__":
    unittest.main()
