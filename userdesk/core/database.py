"""Engine and session factory backing the user record store."""

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from userdesk.core.config import settings


def _connect_args(url: str) -> dict[str, object]:
    """SQLite connections are shared across request threads."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Bound parameters include password hashes; keep them out of error messages and echo.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    hide_parameters=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for routes that talk to the database directly (health)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """True when the users database answers a trivial query."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
