"""Database engine and session factory for local state."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from trip_tracker.db.models import Base


def create_local_state_engine(database_url: str) -> Engine:
    """Create SQLAlchemy engine for local state and ensure tables exist.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.

    Raises:
        ValueError: If database_url is empty.
    """
    if not database_url:
        raise ValueError("local_state_url must be set to a valid connection string.")

    if database_url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    else:
        engine = create_engine(database_url, pool_pre_ping=True, echo=False)

    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, expire_on_commit=False)
