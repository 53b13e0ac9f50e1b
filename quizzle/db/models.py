"""SQLAlchemy models for QuizzleQuest persistence."""
from datetime import datetime, timezone
from sqlalchemy import Column, Text, LargeBinary, DateTime
from quizzle.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueEntry(Base):
    """One opaque snapshot stored under a fixed logical key.

    Progress records and the cached daily challenge are each serialized
    wholesale into ``value`` and overwritten on every update.
    """
    __tablename__ = "key_value_entries"

    key = Column(Text, primary_key=True)  # e.g., "userProgress"
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)
