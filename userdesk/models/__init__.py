"""SQLAlchemy ORM models."""

from userdesk.models.base import Base
from userdesk.models.user import User

__all__ = ["Base", "User"]
