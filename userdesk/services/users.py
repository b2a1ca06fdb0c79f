"""User account service: creation, the generic update pipeline, privileged direct set and queries.

Every public method returns a value and never raises for expected failures. Write
operations return result models carrying an error message; read operations degrade
to None, [] or 0.

Generic update pipeline, in order:
  fetch current record -> drop non-writable keys and coerce -> reject empty update
  -> validate -> password complexity check and hashing -> audit diff -> single store write.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from userdesk.core.security import CredentialHasher, PasswordComplexityPolicy
from userdesk.schemas.users import CreateUserResult, DirectSetResult, UpdateUserResult
from userdesk.services.change_log import logged_changes
from userdesk.services.errors import (
    EmptyUpdateError,
    NotFoundError,
    StoreError,
    UserServiceError,
    ValidationError,
)
from userdesk.services.exposure import filter_fields
from userdesk.services.field_policy import (
    FIELD_POLICY,
    FieldDescriptor,
    coerce,
    project_writable,
    validate,
    validate_fields,
)

if TYPE_CHECKING:
    from userdesk.core.config import Settings
    from userdesk.services.record_store import Clause, RecordStore

logger = logging.getLogger(__name__)

# Plaintext key accepted by generic updates and the column its hash is stored in.
PASSWORD_FIELD = "password"
PASSWORD_HASH_FIELD = "password_hash"


class UpdateStage(str, Enum):
    """Stages of the generic update pipeline; reported when a run fails."""

    FETCHING = "fetching"
    FILTERING = "filtering"
    VALIDATING = "validating"
    PASSWORD_HANDLING = "password_handling"
    DIFFING = "diffing"
    PERSISTING = "persisting"


def _parse_user_id(user_id: Any) -> int:
    """Integer id from caller input; missing ids are a validation error, malformed ones not found."""
    if user_id is None or user_id == "":
        raise ValidationError("No user id provided for update", field="id")
    if isinstance(user_id, bool):
        raise NotFoundError("User not found")
    try:
        return int(user_id)
    except (TypeError, ValueError):
        raise NotFoundError("User not found") from None


class UserService:
    """
    Context object for user account operations.

    Built once at startup from a record store, a credential hasher, a complexity
    policy and the field policy; holds no per-request state.
    """

    def __init__(
        self,
        store: RecordStore,
        hasher: CredentialHasher,
        complexity: PasswordComplexityPolicy,
        policy: Mapping[str, FieldDescriptor] = FIELD_POLICY,
        default_role: str = "default",
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.complexity = complexity
        self.policy = policy
        self.default_role = default_role

    @classmethod
    def from_settings(cls, settings: Settings, store: RecordStore) -> UserService:
        return cls(
            store=store,
            hasher=CredentialHasher.from_settings(settings),
            complexity=PasswordComplexityPolicy.from_settings(settings),
            default_role=settings.DEFAULT_USER_ROLE,
        )

    def create(
        self, username: Any, password: Any, role: Any | None = None
    ) -> CreateUserResult:
        """Create a user from a username, plaintext password and optional role."""
        try:
            data = {
                "username": validate(
                    "username", coerce("username", username, self.policy), self.policy
                ),
                PASSWORD_HASH_FIELD: self.hasher.hash(password),
                "role": self.default_role if role is None else coerce("role", role, self.policy),
            }
            user = self.store.insert(data)
        except UserServiceError as e:
            logger.error("Failed to create user: %s", e.message)
            return CreateUserResult(user=None, error=e.message)
        logger.info("Created user id=%s role=%s", user.get("id"), user.get("role"))
        return CreateUserResult(user=filter_fields(user), error=None)

    def update(self, user_id: Any, updates: Mapping[str, Any] | None = None) -> UpdateUserResult:
        """
        Generic update from untrusted input.

        Keys outside the writable field policy are dropped silently. A password
        value is checked for complexity and stored only as a hash. The store is
        written once with the complete field set, or not at all.
        """
        stage = UpdateStage.FETCHING
        try:
            record_id = _parse_user_id(user_id)
            current = self.store.fetch_one({"id": record_id})
            if current is None:
                raise NotFoundError("User not found")

            stage = UpdateStage.FILTERING
            fields = project_writable(updates or {}, self.policy)
            if not fields:
                raise EmptyUpdateError("No valid updates applied.")

            stage = UpdateStage.VALIDATING
            fields = validate_fields(fields, self.policy)

            stage = UpdateStage.PASSWORD_HANDLING
            fields = self._handle_password(fields)

            stage = UpdateStage.DIFFING
            changes = logged_changes(fields, current)

            stage = UpdateStage.PERSISTING
            self.store.update_by_id(record_id, fields)
        except StoreError as e:
            logger.error(
                "User update failed at %s: %s (%s)", stage.value, e.message, e.detail
            )
            return UpdateUserResult(success=False, error=e.message, code=e.code)
        except UserServiceError as e:
            logger.info("User update rejected at %s: %s", stage.value, e.message)
            return UpdateUserResult(success=False, error=e.message, code=e.code)

        if changes:
            logger.info("Updated user id=%s changes=%s", record_id, changes)
        return UpdateUserResult(success=True, error=None, changes=changes)

    def _handle_password(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Swap a plaintext password for its hash; otherwise keep every password key out."""
        fields = dict(fields)
        plain = fields.pop(PASSWORD_FIELD, None)
        fields.pop(PASSWORD_HASH_FIELD, None)
        if plain is None:
            return fields
        self.complexity.check(plain)
        fields[PASSWORD_HASH_FIELD] = self.hasher.hash(plain)
        return fields

    def direct_set(self, user_id: Any, data: Mapping[str, Any]) -> DirectSetResult:
        """
        Privileged write of data verbatim, skipping the field policy.

        Only for changes that take no user input for the keys being modified
        (e.g. internal flags). Never expose this through a request handler.
        """
        try:
            record_id = _parse_user_id(user_id)
            if "id" in data and data["id"] != record_id:
                return DirectSetResult(user=None, message="User id cannot be changed.")
            user = self.store.update_by_id(record_id, dict(data))
        except UserServiceError as e:
            logger.error("Direct set on user id=%s failed: %s", user_id, e.message)
            return DirectSetResult(user=None, message=e.message)
        return DirectSetResult(user=filter_fields(user), message=None)

    def get(self, clause: Clause) -> dict[str, Any] | None:
        """First user matching the clause, without secret fields."""
        user = self.get_raw(clause)
        return filter_fields(user) if user is not None else None

    def get_raw(self, clause: Clause) -> dict[str, Any] | None:
        """First user matching the clause with every field. Internal use only."""
        try:
            return self.store.fetch_one(clause)
        except StoreError as e:
            logger.error("User lookup failed: %s", e.detail)
            return None

    def where(self, clause: Clause, limit: int | None = None) -> list[dict[str, Any]]:
        try:
            users = self.store.fetch_many(clause, limit=limit)
        except StoreError as e:
            logger.error("User listing failed: %s", e.detail)
            return []
        return [filter_fields(user) for user in users]

    def count(self, clause: Clause) -> int:
        try:
            return self.store.count(clause)
        except StoreError as e:
            logger.error("User count failed: %s", e.detail)
            return 0

    def delete(self, clause: Clause) -> bool:
        """Delete every user matching the clause (an empty clause matches all)."""
        try:
            deleted = self.store.delete_many(clause)
        except StoreError as e:
            logger.error("User delete failed: %s", e.detail)
            return False
        logger.info("Deleted %s user(s) matching %s", deleted, sorted(clause))
        return True
