"""Key-value storage backends for device-local trip state."""

from typing import Protocol

import redis
from sqlalchemy.orm import Session, sessionmaker

from trip_tracker.config import Settings
from trip_tracker.db.engine import create_local_state_engine, create_session_factory
from trip_tracker.db.models import LocalState


class KeyValueStorage(Protocol):
    """String key-value store."""

    def get(self, key: str) -> str | None:
        """Get value for key, None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...


class InMemoryKeyValueStorage:
    """In-memory implementation of KeyValueStorage."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        """Get value for key."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        self._values[key] = value

    def delete(self, key: str) -> None:
        """Remove key."""
        self._values.pop(key, None)


class SqlKeyValueStorage:
    """SQL implementation of KeyValueStorage backed by the local_state table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        """Get value for key."""
        with self._session_factory() as session:
            row = session.get(LocalState, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace value under key."""
        with self._session_factory() as session:
            session.merge(LocalState(key=key, value=value))
            session.commit()

    def delete(self, key: str) -> None:
        """Remove key."""
        with self._session_factory() as session:
            row = session.get(LocalState, key)
            if row is not None:
                session.delete(row)
                session.commit()


class RedisKeyValueStorage:
    """Redis implementation of KeyValueStorage using GET/SET/DEL."""

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize storage.

        Args:
            redis_client: Redis client created with decode_responses=True
        """
        self._redis = redis_client

    def get(self, key: str) -> str | None:
        """Get value for key."""
        value = self._redis.get(key)
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else str(value)

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        self._redis.set(key, value)

    def delete(self, key: str) -> None:
        """Remove key."""
        self._redis.delete(key)


def create_storage(settings: Settings) -> KeyValueStorage:
    """Pick a storage backend from settings.

    Redis wins when redis_url is set, then SQL when local_state_url is set,
    otherwise state lives in memory for the process lifetime.
    """
    if settings.redis_url:
        client = redis.from_url(settings.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        return RedisKeyValueStorage(client)

    if settings.local_state_url:
        engine = create_local_state_engine(settings.local_state_url)
        return SqlKeyValueStorage(create_session_factory(engine))

    return InMemoryKeyValueStorage()
