"""Audit-safe change sets for user updates."""

from collections.abc import Mapping
from typing import Any

# Fields never written to an audit log, whether holding plaintext or a hash.
SENSITIVE_FIELDS = frozenset({"password", "password_hash"})


def logged_changes(
    updates: Mapping[str, Any], previous: Mapping[str, Any] | None = None
) -> dict[str, str]:
    """
    Describe what an update changes as {field: "before => after"}.

    Only fields whose new value differs from the stored one are listed; sensitive
    fields are always omitted. Has no effect on persisted state.
    """
    previous = previous or {}
    changes: dict[str, str] = {}
    for key, value in updates.items():
        if key in SENSITIVE_FIELDS:
            continue
        before = previous.get(key)
        if value != before:
            changes[key] = f"{before} => {value}"
    return changes
