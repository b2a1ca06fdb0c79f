"""Unit tests for userdesk.core.security: bcrypt hashing and password complexity rules."""

import unittest
from unittest.mock import MagicMock

from userdesk.core.security import CredentialHasher, PasswordComplexityPolicy
from userdesk.services.errors import CredentialError, WeakCredentialError


class TestCredentialHasher(unittest.TestCase):
    """Hashes are salted, verifiable and never equal to the plaintext."""

    def setUp(self) -> None:
        self.hasher = CredentialHasher(rounds=4)

    def test_hash_differs_from_plaintext(self) -> None:
        hashed = self.hasher.hash("correct horse")
        self.assertNotEqual(hashed, "correct horse")
        self.assertTrue(hashed.startswith("$2"))

    def test_same_plaintext_hashes_differently(self) -> None:
        self.assertNotEqual(self.hasher.hash("same"), self.hasher.hash("same"))

    def test_verify(self) -> None:
        hashed = self.hasher.hash("correct horse")
        self.assertTrue(self.hasher.verify("correct horse", hashed))
        self.assertFalse(self.hasher.verify("wrong horse", hashed))

    def test_verify_rejects_garbage_hash(self) -> None:
        self.assertFalse(self.hasher.verify("x", "not-a-hash"))

    def test_empty_password_raises(self) -> None:
        with self.assertRaises(CredentialError):
            self.hasher.hash("")

    def test_non_string_raises(self) -> None:
        with self.assertRaises(CredentialError):
            self.hasher.hash(None)  # type: ignore[arg-type]

    def test_invalid_rounds_raise_credential_error(self) -> None:
        with self.assertRaises(CredentialError):
            CredentialHasher(rounds=2).hash("secret")

    def test_from_settings(self) -> None:
        settings = MagicMock()
        settings.BCRYPT_ROUNDS = 5
        self.assertEqual(CredentialHasher.from_settings(settings).rounds, 5)


class TestPasswordComplexityPolicy(unittest.TestCase):
    """Length bounds always apply; character-class rules only when configured."""

    def test_default_accepts_long_enough(self) -> None:
        PasswordComplexityPolicy().check("abcdefgh")

    def test_too_short(self) -> None:
        with self.assertRaises(WeakCredentialError) as ctx:
            PasswordComplexityPolicy().check("short")
        self.assertIn("at least 8 characters", ctx.exception.message)

    def test_too_long(self) -> None:
        with self.assertRaises(WeakCredentialError):
            PasswordComplexityPolicy(max_length=10).check("a" * 11)

    def test_all_class_rules_required_by_default(self) -> None:
        policy = PasswordComplexityPolicy(uppercase=1, numeric=1)
        policy.check("Abcdefg1")
        with self.assertRaises(WeakCredentialError) as ctx:
            policy.check("abcdefg1")
        self.assertIn("uppercase letter", ctx.exception.message)

    def test_requirement_count_allows_partial(self) -> None:
        policy = PasswordComplexityPolicy(uppercase=1, numeric=1, symbol=1, requirement_count=2)
        policy.check("Abcdefg1")
        with self.assertRaises(WeakCredentialError):
            policy.check("abcdefgh")

    def test_plural_message(self) -> None:
        with self.assertRaises(WeakCredentialError) as ctx:
            PasswordComplexityPolicy(numeric=2).check("abcdefg1")
        self.assertIn("at least 2 numbers", ctx.exception.message)

    def test_from_settings(self) -> None:
        settings = MagicMock()
        settings.PASSWORD_MIN_CHAR = 12
        settings.PASSWORD_MAX_CHAR = 64
        settings.PASSWORD_LOWERCASE = 1
        settings.PASSWORD_UPPERCASE = 0
        settings.PASSWORD_NUMERIC = 0
        settings.PASSWORD_SYMBOL = 0
        settings.PASSWORD_REQUIREMENTS = 0
        policy = PasswordComplexityPolicy.from_settings(settings)
        self.assertEqual(policy.min_length, 12)
        self.assertEqual(policy.lowercase, 1)


if __name__ == "__main__":
    unittest.main()
