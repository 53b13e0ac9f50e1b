"""Whole-record snapshot persistence for progress and the daily challenge.

A snapshot that cannot be read or decoded is treated as absent. A snapshot
that cannot be written is logged and dropped; the caller's in-memory record
stays authoritative.
"""
import logging
from typing import Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from quizzle.db.store import KeyValueStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_snapshot(store: KeyValueStore, key: str, model: Type[ModelT]) -> Optional[ModelT]:
    """Return the decoded record stored under ``key`` or None."""
    try:
        raw = store.get(key)
    except SQLAlchemyError as e:
        logger.error(f"Could not read snapshot {key}: {e}", extra={"store_key": key})
        return None

    if raw is None:
        return None

    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(
            f"Discarding unreadable snapshot {key}: {e.error_count()} validation errors",
            extra={"store_key": key}
        )
        return None


def save_snapshot(store: KeyValueStore, key: str, record: BaseModel) -> bool:
    """Overwrite the snapshot under ``key``. Returns False if the write failed."""
    try:
        store.set(key, record.model_dump_json().encode("utf-8"))
    except SQLAlchemyError as e:
        logger.error(f"Could not write snapshot {key}: {e}", exc_info=True, extra={"store_key": key})
        return False
    return True


def delete_snapshot(store: KeyValueStore, key: str) -> bool:
    """Remove the snapshot under ``key``. Returns False if the delete failed."""
    try:
        store.delete(key)
    except SQLAlchemyError as e:
        logger.error(f"Could not delete snapshot {key}: {e}", exc_info=True, extra={"store_key": key})
        return False
    return True
