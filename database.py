"""Minimal data access layer for the backend's Postgres database.

Creates one SQLAlchemy engine per process and hands out ORM sessions to
the maintenance scripts. Also owns the raw-SQL schema patches that the
backend's migrations do not cover.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import sqlalchemy
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, sessionmaker

import config
from logger import get_logger

logger = get_logger(__name__)

DUPLICATE_TABLE_SQLSTATE = "42P07"

TOKEN_TRANSACTION_DDL = [
    """
    CREATE TABLE IF NOT EXISTS "TokenTransaction" (
        "id" TEXT NOT NULL,
        "userId" TEXT NOT NULL,
        "type" TEXT NOT NULL,
        "amount" DOUBLE PRECISION NOT NULL,
        "balanceAfter" DOUBLE PRECISION NOT NULL,
        "challengeId" TEXT,
        "description" TEXT NOT NULL,
        "metadata" JSONB,
        "createdAt" TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP,
        CONSTRAINT "TokenTransaction_pkey" PRIMARY KEY ("id")
    )
    """,
    'CREATE INDEX IF NOT EXISTS "TokenTransaction_userId_idx" ON "TokenTransaction"("userId")',
    'CREATE INDEX IF NOT EXISTS "TokenTransaction_challengeId_idx" ON "TokenTransaction"("challengeId")',
    """
    DO $$
    BEGIN
        IF NOT EXISTS (
            SELECT 1 FROM pg_constraint WHERE conname = 'TokenTransaction_userId_fkey'
        ) THEN
            ALTER TABLE "TokenTransaction"
            ADD CONSTRAINT "TokenTransaction_userId_fkey"
            FOREIGN KEY ("userId") REFERENCES "User"("id") ON DELETE RESTRICT ON UPDATE CASCADE;
        END IF;
    END $$
    """,
    """
    DO $$
    BEGIN
        IF NOT EXISTS (
            SELECT 1 FROM pg_constraint WHERE conname = 'TokenTransaction_challengeId_fkey'
        ) THEN
            ALTER TABLE "TokenTransaction"
            ADD CONSTRAINT "TokenTransaction_challengeId_fkey"
            FOREIGN KEY ("challengeId") REFERENCES "Challenge"("id") ON DELETE SET NULL ON UPDATE CASCADE;
        END IF;
    END $$
    """,
]


def resolve_database_url(url: Optional[str] = None) -> str:
    """Return a SQLAlchemy URL, defaulting Postgres URLs to the pg8000 driver.

    The backend's DATABASE_URL is a plain ``postgresql://`` URL, so the
    driver suffix is added when none is given.
    """
    url = url or config.DATABASE_URL
    # Fail fast if the connection string is missing
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is required but not set.")
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+pg8000://" + url[len(prefix):]
    return url


def is_already_exists_error(exc: Exception) -> bool:
    """True when a DB error reports a duplicate table/relation."""
    if "already exists" in str(exc):
        return True
    orig = getattr(exc, "orig", exc)
    if getattr(orig, "pgcode", None) == DUPLICATE_TABLE_SQLSTATE:
        return True
    # pg8000 reports the server fields as a dict in args[0]
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], dict):
        return args[0].get("C") == DUPLICATE_TABLE_SQLSTATE
    return False


class PlatformDB:
    """Thin wrapper around an engine and its session factory."""

    def __init__(self, url: Optional[str] = None, **engine_kwargs):
        engine_kwargs.setdefault("echo", config.DATABASE_ECHO)
        self.engine = sqlalchemy.create_engine(resolve_database_url(url), **engine_kwargs)
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session; commit on success, roll back on error."""
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_token_transaction_table(self) -> bool:
        """Create the TokenTransaction table, indexes and FKs if absent.

        Returns True when the statements ran, False when Postgres reported
        that the table already exists. Other errors propagate.
        """
        try:
            with self.engine.begin() as conn:
                for stmt in TOKEN_TRANSACTION_DDL:
                    conn.execute(text(stmt))
        except DBAPIError as e:
            if is_already_exists_error(e):
                logger.info("TokenTransaction already exists; nothing to do.")
                return False
            raise
        return True

    def dispose(self) -> None:
        self.engine.dispose()


_db: Optional[PlatformDB] = None


def get_db() -> PlatformDB:
    """Get or create the process-wide database client."""
    global _db
    if _db is None:
        _db = PlatformDB()
    return _db


def close_db() -> None:
    """Dispose of the process-wide client, if one was created."""
    global _db
    if _db is not None:
        _db.dispose()
        _db = None
