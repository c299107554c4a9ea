"""
Database engine and session factory.

Wraps SQLAlchemy engine creation so the service, the ``init`` command and the
tests all build connections the same way.  SQLite connections get foreign key
enforcement switched on, which SQLite leaves disabled by default.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from todoboard.config import ensure_database_directory, get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    Args:
        database_url: SQLAlchemy URL. Defaults to ``Settings.database_url``.
        echo: Log emitted SQL. Defaults to ``Settings.sql_echo``.

    Returns:
        Configured engine
    """
    settings = get_settings()
    url = database_url or settings.database_url
    echo = settings.sql_echo if echo is None else echo

    connect_args = {}
    if url.startswith("sqlite"):
        ensure_database_directory(url)
        # Sessions may be used from the threadpool FastAPI runs sync code on
        connect_args["check_same_thread"] = False

    engine = create_engine(url, echo=echo, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Yield a session and always close it afterwards."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
