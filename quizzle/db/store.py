"""Key-value persistence over the ``key_value_entries`` table.

Providers read one snapshot per key at construction and overwrite it in full
after every mutation. The store itself does not swallow errors; callers decide
how a failed read or write degrades.
"""
import logging
from typing import Optional
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker
from quizzle.db.database import SessionLocal
from quizzle.db.models import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Get/set/delete raw bytes by key."""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes for ``key`` or None when absent."""
        db = self._session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            return bytes(entry.value) if entry is not None else None
        finally:
            db.close()

    def set(self, key: str, value: bytes) -> None:
        """Overwrite the value stored under ``key``."""
        db = self._session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            if entry is None:
                db.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            db.commit()
            logger.debug(f"Stored {len(value)} bytes under {key}", extra={"store_key": key})
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting an absent key is a no-op."""
        db = self._session_factory()
        try:
            db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        db = self._session_factory()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
