from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import QueuePool

from gardenchat.core.config import settings
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.sqlite.database")


class Base(DeclarativeBase):
    """Base class for all ORM models."""


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode so the plant and tip lookups can read side by side."""
    if not settings.database_url.startswith("sqlite"):
        return
    cursor = dbapi_conn.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA temp_store=MEMORY")
    except Exception as e:
        # WAL is unavailable on some filesystems and for in-memory databases
        logger.warning("Could not set SQLite pragmas: %s", e)
    finally:
        cursor.close()


if settings.database_url.startswith("sqlite"):
    engine = create_engine(
        settings.database_url,
        connect_args={
            "check_same_thread": settings.sqlite_check_same_thread,
            "timeout": settings.sqlite_timeout,
        },
        poolclass=QueuePool,
        pool_size=max(5, settings.pool_size or 5),
        max_overflow=max(10, settings.max_overflow or 10),
        pool_pre_ping=settings.pool_pre_ping,
        echo=False,
    )
else:
    engine = create_engine(
        settings.database_url,
        poolclass=QueuePool,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_pre_ping=settings.pool_pre_ping,
        pool_recycle=settings.pool_recycle,
        pool_timeout=settings.pool_timeout,
        echo=False,
    )

# Plain session factory; create a new Session per store call
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)


@contextmanager
def session_scope(factory=None):
    """
    Context manager for a short-lived session.
    Read-only callers never commit; the session is always closed.
    """
    db = (factory or SessionLocal)()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> bool:
    """
    Verify the database is reachable.
    Call this during app startup.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("[OK] Database connection initialized successfully")
        return True
    except Exception as e:
        logger.error("[FAIL] Database connection failed: %s", e)
        return False
