"""Strip secret fields from user records before they leave the service layer."""

from collections.abc import Mapping
from typing import Any

from userdesk.services.change_log import SENSITIVE_FIELDS


def filter_fields(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of the record without password-family fields."""
    return {key: value for key, value in record.items() if key not in SENSITIVE_FIELDS}
