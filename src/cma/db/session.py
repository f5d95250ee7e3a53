"""
Database Session Management

Engine construction for the listing store and the unit-of-work helper used
by scripts. The API opens its own per-request sessions in dependencies.py.
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, exc, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config.settings import settings
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str = None) -> Engine:
    """
    Create a database engine for the configured URL.

    Pool sizing only applies to server databases; SQLite gets the
    single-file defaults.

    Args:
        database_url: Override of settings.database_url

    Returns:
        SQLAlchemy engine
    """
    url = database_url or settings.database_url
    options = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
    }
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
            pool_recycle=settings.database_pool_recycle,
        )
    return create_engine(url, **options)


engine = build_engine()

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)


@contextmanager
def get_db_session(commit: bool = True) -> Generator[Session, None, None]:
    """
    Open a session for one unit of work.

    Usage:
        with get_db_session() as session:
            records = PropertyRepository().get_visible(session)

    Args:
        commit: Commit on clean exit. With False the work is rolled back,
            which is how dry runs discard their writes.

    Yields:
        Database session
    """
    session = SessionLocal()
    try:
        yield session
        if commit:
            session.commit()
        else:
            session.rollback()
    except Exception as e:
        session.rollback()
        logger.error(
            "database_session_rollback",
            error=str(e),
            error_type=type(e).__name__
        )
        raise
    finally:
        session.close()


def ping(session: Session) -> Optional[str]:
    """
    Run a trivial query on the session's connection.

    Returns:
        None when the database answered, otherwise the error text
    """
    try:
        session.execute(text("SELECT 1"))
    except exc.SQLAlchemyError as e:
        logger.error("database_ping_failed", error=str(e), error_type=type(e).__name__)
        return str(e)
    return None


def create_all_tables(bind: Engine = None):
    """
    Create all listing-store tables.

    Used by scripts/load_listings.py --create-tables and local setup.
    """
    from src.cma.db.base import Base, import_all_models

    import_all_models()
    Base.metadata.create_all(bind=bind or engine)
    logger.info("database_tables_created", tables=sorted(Base.metadata.tables))
