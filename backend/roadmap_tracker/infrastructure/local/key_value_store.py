"""
SQLite key-value store.

The desktop counterpart of browser ``localStorage``: a synchronous string
to string map persisted in a single SQLite table.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from roadmap_tracker.core.config import get_settings
from roadmap_tracker.core.exceptions import InfrastructureError


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


class KeyValueORM(Base):
    """Key-value entry ORM model."""

    __tablename__ = "key_value_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


def get_engine(url: Optional[str] = None) -> Engine:
    """Get engine instance for the key-value database."""
    settings = get_settings()
    return create_engine(url or settings.LOCAL_STORE_URL, echo=False)


class KeyValueStore:
    """Synchronous key-value store backed by SQLite."""

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None):
        self._engine = engine or get_engine(url)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        try:
            with self._session_factory() as session:
                result = session.execute(select(KeyValueORM.value).where(KeyValueORM.key == key))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to read key {key!r}: {e}")

    def set_item(self, key: str, value: str) -> None:
        """Create or replace a value."""
        try:
            with self._session_factory() as session:
                orm = session.get(KeyValueORM, key)
                if orm is None:
                    session.add(KeyValueORM(key=key, value=value))
                else:
                    orm.value = value
                session.commit()
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to write key {key!r}: {e}")

    def remove_item(self, key: str) -> bool:
        """Delete a key. Returns False if it did not exist."""
        try:
            with self._session_factory() as session:
                orm = session.get(KeyValueORM, key)
                if orm is None:
                    return False
                session.delete(orm)
                session.commit()
                return True
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to delete key {key!r}: {e}")

    def dispose(self) -> None:
        self._engine.dispose()
