"""Record store for user accounts: the persistence operations the user service relies on.

Records cross this boundary as plain dicts keyed by column name. Filters ("clauses")
are field-equality mappings. Every failure is raised as StoreError with a generic
message; only the driver's own error text (never bound parameters) is kept
on ``detail`` and logged.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from userdesk.models import User
from userdesk.services.errors import StoreError

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Clause = Mapping[str, Any]


class RecordStore(Protocol):
    """Persistence operations required by UserService."""

    def insert(self, data: Mapping[str, Any]) -> Record: ...

    def fetch_one(self, clause: Clause) -> Record | None: ...

    def fetch_many(self, clause: Clause, limit: int | None = None) -> list[Record]: ...

    def count(self, clause: Clause) -> int: ...

    def update_by_id(self, record_id: int, data: Mapping[str, Any]) -> Record: ...

    def delete_many(self, clause: Clause) -> int: ...


def _to_record(user: User) -> Record:
    """Plain dict of every column on a User row."""
    return {column.key: getattr(user, column.key) for column in User.__table__.columns}


class SqlAlchemyRecordStore:
    """RecordStore over the users table; one session and transaction per call."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _fail(self, operation: str, error: Exception, message: str | None = None) -> StoreError:
        # Driver text only: SQLAlchemy's own message embeds the statement's bound values.
        detail = str(getattr(error, "orig", None) or error)
        logger.error("User store %s failed: %s", operation, detail)
        return StoreError(message or f"Failed to {operation} user.", detail=detail)

    def insert(self, data: Mapping[str, Any]) -> Record:
        with self._session_factory() as session:
            try:
                user = User(**data)
                session.add(user)
                session.commit()
                session.refresh(user)
                return _to_record(user)
            except IntegrityError as e:
                session.rollback()
                raise self._fail("create", e, "A user with these values already exists.") from e
            except (SQLAlchemyError, TypeError) as e:
                session.rollback()
                raise self._fail("create", e) from e

    def fetch_one(self, clause: Clause) -> Record | None:
        with self._session_factory() as session:
            try:
                user = session.query(User).filter_by(**clause).first()
            except SQLAlchemyError as e:
                raise self._fail("fetch", e) from e
            return _to_record(user) if user is not None else None

    def fetch_many(self, clause: Clause, limit: int | None = None) -> list[Record]:
        with self._session_factory() as session:
            try:
                query = session.query(User).filter_by(**clause).order_by(User.id)
                if limit is not None:
                    query = query.limit(limit)
                return [_to_record(user) for user in query.all()]
            except SQLAlchemyError as e:
                raise self._fail("list", e, "Failed to list users.") from e

    def count(self, clause: Clause) -> int:
        with self._session_factory() as session:
            try:
                return session.query(User).filter_by(**clause).count()
            except SQLAlchemyError as e:
                raise self._fail("count", e, "Failed to count users.") from e

    def update_by_id(self, record_id: int, data: Mapping[str, Any]) -> Record:
        """Apply every field in data to one row in a single commit."""
        with self._session_factory() as session:
            try:
                user = session.get(User, record_id)
                if user is None:
                    raise StoreError("Failed to update user.", detail="Record to update not found.")
                unknown = [key for key in data if key not in User.__table__.columns]
                if unknown:
                    raise StoreError(
                        "Failed to update user.",
                        detail=f"Unknown column(s): {', '.join(sorted(unknown))}",
                    )
                for key, value in data.items():
                    setattr(user, key, value)
                session.commit()
                session.refresh(user)
                return _to_record(user)
            except IntegrityError as e:
                session.rollback()
                raise self._fail("update", e, "A user with these values already exists.") from e
            except SQLAlchemyError as e:
                session.rollback()
                raise self._fail("update", e) from e

    def delete_many(self, clause: Clause) -> int:
        with self._session_factory() as session:
            try:
                deleted = (
                    session.query(User)
                    .filter_by(**clause)
                    .delete(synchronize_session=False)
                )
                session.commit()
                return deleted
            except SQLAlchemyError as e:
                session.rollback()
                raise self._fail("delete", e, "Failed to delete users.") from e
