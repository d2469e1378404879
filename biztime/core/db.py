import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from biztime.core.config import settings
from biztime.core.errors import BizTimeError, StorageError

logger = logging.getLogger(__name__)

# SQLSTATE codes reported by PostgreSQL drivers
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


# ----------------------------------------------------
# 1. CREATE ENGINE
# ----------------------------------------------------
def _engine_kwargs(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    **_engine_kwargs(settings.DATABASE_URL),
)


# SQLite leaves foreign keys off unless asked, per connection.
@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ----------------------------------------------------
# 2. SESSION FACTORY
# ----------------------------------------------------
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ----------------------------------------------------
# 3. BASE CLASS FOR ALL MODELS
# ----------------------------------------------------
Base = declarative_base()


# ----------------------------------------------------
# 4. DEPENDENCY FOR FASTAPI
# ----------------------------------------------------
def get_db():
    """
    FastAPI dependency: yields a DB session scoped to one request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ----------------------------------------------------
# 5. SCHEMA CREATION
# ----------------------------------------------------
def init_db(bind: Engine | None = None) -> None:
    """
    Create any table that does not exist yet.

    Existing tables are left alone; there is no column-level migration.
    """
    # Register every model on Base.metadata
    from biztime.models import company_model, industry_model, invoice_model  # noqa: F401

    bind = bind or engine
    existing = set(inspect(bind).get_table_names())
    missing = [t for t in Base.metadata.sorted_tables if t.name not in existing]

    if not missing:
        logger.info("[DB] Schema up to date")
        return

    for table in missing:
        logger.info("[DB] Creating table: %s", table.name)
    Base.metadata.create_all(bind=bind, tables=missing)


# ----------------------------------------------------
# 6. INTEGRITY ERROR CLASSIFICATION
# ----------------------------------------------------
def classify_integrity_error(exc: IntegrityError) -> str:
    """
    Return "foreign_key", "unique" or "other" for an IntegrityError.

    PostgreSQL drivers expose the SQLSTATE (psycopg2 as ``pgcode``, psycopg 3
    as ``sqlstate``); SQLite only gives a message.
    """
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == FOREIGN_KEY_VIOLATION:
        return "foreign_key"
    if code == UNIQUE_VIOLATION:
        return "unique"

    message = str(orig)
    if "FOREIGN KEY constraint failed" in message:
        return "foreign_key"
    if "UNIQUE constraint failed" in message:
        return "unique"
    return "other"


def check_connection(bind: Engine | None = None) -> bool:
    """Used by /health."""
    bind = bind or engine
    try:
        with bind.connect() as conn:
            conn.exec_driver_sql("SELECT 1")
        return True
    except Exception as e:
        logger.error("[DB] Health check failed: %s", e)
        return False


@contextmanager
def write_scope(
    db: Session,
    *,
    on_foreign_key: BizTimeError | None = None,
    on_unique: BizTimeError | None = None,
) -> Iterator[Session]:
    """
    Run the block's writes and commit them, translating integrity failures
    into domain errors.

    The session is rolled back before anything is raised. Integrity failures
    with no matching domain error, and any other database failure, become a
    StorageError.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        kind = classify_integrity_error(e)
        if kind == "foreign_key" and on_foreign_key is not None:
            raise on_foreign_key from e
        if kind == "unique" and on_unique is not None:
            raise on_unique from e
        logger.error("[DB] Integrity error: %s", e.orig)
        raise StorageError("Error when writing to database.") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("[DB] Write failed: %s", e)
        raise StorageError("Error when writing to database.") from e
    except BizTimeError:
        db.rollback()
        raise
