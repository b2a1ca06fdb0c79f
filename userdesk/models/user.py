"""ORM model for application user accounts."""

from sqlalchemy import Column, DateTime, Integer, String, func

from userdesk.models.base import Base


class User(Base):
    """
    User account record.

    password_hash is never exposed outside the service layer.
    suspended and seen_recovery_codes are stored as 0/1 integers.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False, default="default")
    pfp_filename = Column(String(255), nullable=True)
    suspended = Column(Integer, nullable=False, default=0)
    seen_recovery_codes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    last_updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
