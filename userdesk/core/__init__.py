"""Core app configuration, database and credential handling."""

from userdesk.core.config import get_settings, settings
from userdesk.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
