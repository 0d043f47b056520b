from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from vidto.config import Settings
from vidto.logger import db_logger

# Base class for models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, *, production: bool = False, echo: bool = False) -> Engine:
    """
    Create an engine tuned for the target backend.

    SQLite gets foreign key enforcement (cascades depend on it) and, for
    in-memory databases, a single shared connection.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}, "echo": echo}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    if production:
        # Production - conservative pool, recycle to avoid stale connections
        return create_engine(
            database_url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,
            echo=False,
        )

    # Local development - Larger pool
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=echo,
    )


class Database:
    """Store handle owned by the application, created at startup and disposed at shutdown."""

    def __init__(self, database_url: str, *, production: bool = False, echo: bool = False):
        self.url = database_url
        self.engine = build_engine(database_url, production=production, echo=echo)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "Database":
        return cls(config.database_url, production=config.is_production, echo=config.debug)

    def create_all(self) -> None:
        """Create tables for every registered model."""
        from vidto import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        db_logger.info("Database schema ensured")

    def drop_all(self) -> None:
        from vidto import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> None:
        """Open and release a connection; raises if the store is unreachable."""
        with self.engine.connect():
            pass

    def dispose(self) -> None:
        self.engine.dispose()
        db_logger.info("Database connections released")


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
