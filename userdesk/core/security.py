"""Password hashing and password complexity checks."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import TYPE_CHECKING

import bcrypt

from userdesk.services.errors import CredentialError, WeakCredentialError

if TYPE_CHECKING:
    from userdesk.core.config import Settings

# Bcrypt cost (rounds) when no settings are supplied.
DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of a secret.
BCRYPT_MAX_BYTES = 72


class CredentialHasher:
    """Salted one-way hashing of plaintext secrets with a fixed bcrypt work factor."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    @classmethod
    def from_settings(cls, settings: "Settings") -> CredentialHasher:
        return cls(rounds=settings.BCRYPT_ROUNDS)

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        if not isinstance(plain_password, str) or not plain_password:
            raise CredentialError("Password must be a non-empty string.")
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds))
        except (ValueError, TypeError) as e:
            raise CredentialError("Password could not be hashed.") from e
        return hashed.decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash."""
        if not isinstance(plain_password, str) or not isinstance(hashed, str):
            return False
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


@dataclass(frozen=True)
class PasswordComplexityPolicy:
    """
    Configurable password complexity rules.

    The character-class minimums (lowercase, uppercase, numeric, symbol) that are
    non-zero are the candidate rules; ``requirement_count`` says how many of them
    must hold, 0 meaning all of them. Length bounds always apply.
    """

    min_length: int = 8
    max_length: int = 250
    lowercase: int = 0
    uppercase: int = 0
    numeric: int = 0
    symbol: int = 0
    requirement_count: int = 0

    @classmethod
    def from_settings(cls, settings: "Settings") -> PasswordComplexityPolicy:
        return cls(
            min_length=settings.PASSWORD_MIN_CHAR,
            max_length=settings.PASSWORD_MAX_CHAR,
            lowercase=settings.PASSWORD_LOWERCASE,
            uppercase=settings.PASSWORD_UPPERCASE,
            numeric=settings.PASSWORD_NUMERIC,
            symbol=settings.PASSWORD_SYMBOL,
            requirement_count=settings.PASSWORD_REQUIREMENTS,
        )

    def check(self, password: str) -> None:
        """Raise WeakCredentialError describing the first unmet rule."""
        if len(password) < self.min_length:
            raise WeakCredentialError(
                f"Password must be at least {self.min_length} characters long."
            )
        if len(password) > self.max_length:
            raise WeakCredentialError(
                f"Password must be at most {self.max_length} characters long."
            )

        class_rules = [
            (self.lowercase, sum(c.islower() for c in password), "lowercase letter"),
            (self.uppercase, sum(c.isupper() for c in password), "uppercase letter"),
            (self.numeric, sum(c.isdigit() for c in password), "number"),
            (
                self.symbol,
                sum(c in string.punctuation or c.isspace() for c in password),
                "symbol",
            ),
        ]
        active = [(minimum, found, label) for minimum, found, label in class_rules if minimum > 0]
        if not active:
            return

        failed = [(minimum, label) for minimum, found, label in active if found < minimum]
        required = self.requirement_count or len(active)
        required = min(required, len(active))
        if len(active) - len(failed) >= required:
            return
        minimum, label = failed[0]
        suffix = "" if minimum == 1 else "s"
        raise WeakCredentialError(
            f"Password must contain at least {minimum} {label}{suffix}."
        )
