"""Field policy for generic user updates: which fields are writable, how raw values are coerced and validated.

The policy is a static mapping resolved at import time. Keys outside it are dropped
from update requests rather than rejected, so callers may pass a full record and have
it projected down to the writable subset.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from userdesk.services.errors import ValidationError

USERNAME_MIN_LEN = 2
USERNAME_MAX_LEN = 100


class Coercion(str, Enum):
    """How a raw input value is turned into its stored representation."""

    STRING = "string"
    FLAG = "flag"


Validator = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldDescriptor:
    """Coercion kind plus optional semantic validator for one writable field."""

    coercion: Coercion = Coercion.STRING
    validator: Validator | None = None


def is_truthy(value: Any) -> bool:
    """None, False, numeric zero and the empty string are false; everything else is true."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def validate_username(value: Any) -> str:
    """Username length must be within [USERNAME_MIN_LEN, USERNAME_MAX_LEN]."""
    username = str(value)
    if len(username) > USERNAME_MAX_LEN:
        raise ValidationError(
            f"Username cannot be longer than {USERNAME_MAX_LEN} characters",
            field="username",
        )
    if len(username) < USERNAME_MIN_LEN:
        raise ValidationError(
            f"Username must be at least {USERNAME_MIN_LEN} characters",
            field="username",
        )
    return username


FIELD_POLICY: Mapping[str, FieldDescriptor] = MappingProxyType(
    {
        "username": FieldDescriptor(Coercion.STRING, validate_username),
        "password": FieldDescriptor(Coercion.STRING),
        "pfp_filename": FieldDescriptor(Coercion.STRING),
        "role": FieldDescriptor(Coercion.STRING),
        "suspended": FieldDescriptor(Coercion.FLAG),
    }
)

WRITABLE_FIELDS = frozenset(FIELD_POLICY)


def is_writable(key: str, policy: Mapping[str, FieldDescriptor] = FIELD_POLICY) -> bool:
    return key in policy


def coerce(
    key: str, value: Any, policy: Mapping[str, FieldDescriptor] = FIELD_POLICY
) -> Any:
    """Cast a raw value to the stored type of a writable field."""
    descriptor = policy[key]
    if descriptor.coercion is Coercion.FLAG:
        return 1 if is_truthy(value) else 0
    if value is None:
        return ""
    return str(value)


def validate(
    key: str, value: Any, policy: Mapping[str, FieldDescriptor] = FIELD_POLICY
) -> Any:
    """Run the field's validator, if any, on an already-coerced value."""
    validator = policy[key].validator
    if validator is None:
        return value
    return validator(value)


def project_writable(
    updates: Mapping[str, Any], policy: Mapping[str, FieldDescriptor] = FIELD_POLICY
) -> dict[str, Any]:
    """Drop non-writable keys and coerce the rest. The input mapping is not modified."""
    return {
        key: coerce(key, value, policy)
        for key, value in updates.items()
        if is_writable(key, policy)
    }


def validate_fields(
    fields: Mapping[str, Any], policy: Mapping[str, FieldDescriptor] = FIELD_POLICY
) -> dict[str, Any]:
    """
    Validate coerced fields, returning the validated copy.

    The first failure raises ValidationError, so either every field passes or
    nothing from the request is used.
    """
    return {key: validate(key, value, policy) for key, value in fields.items()}
