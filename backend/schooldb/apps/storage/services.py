from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from . import models, seed

logger = logging.getLogger(__name__)

USERS_KEY = "ws_users"
ITEMS_KEY = "ws_items"
REQUISITIONS_KEY = "ws_requisitions"
COUNTERS_KEY = "ws_counters"

SEED_COLLECTIONS = {
    USERS_KEY: seed.SEED_USERS,
    ITEMS_KEY: seed.SEED_ITEMS,
    REQUISITIONS_KEY: seed.SEED_REQUISITIONS,
}


def _read_payload(db: Session, key: str) -> Optional[Any]:
    blob = db.get(models.StorageBlob, key)
    if blob is None or not blob.payload:
        return None
    try:
        return json.loads(blob.payload)
    except ValueError:
        logger.warning("Unreadable stored payload, using defaults", extra={"storage_key": key})
        return None


def _write_payload(db: Session, key: str, data: Any) -> None:
    payload = json.dumps(data, ensure_ascii=False)
    blob = db.get(models.StorageBlob, key)
    if blob is None:
        blob = models.StorageBlob(key=key, payload=payload)
        db.add(blob)
    else:
        blob.payload = payload
    db.flush()


def _dump(record: Any) -> Dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", by_alias=True, exclude_none=True)
    return dict(record)


def load_collection(
    db: Session,
    key: str,
    default: Sequence[Dict[str, Any]] = (),
    model: Optional[Type[BaseModel]] = None,
) -> List[Any]:
    """
    Read a whole collection.

    A missing row, bad JSON or a payload that is not a list yields a fresh
    copy of `default` instead of an error. Inside a readable list, records
    failing `model` validation are skipped one by one and the rest are kept.
    """
    data = _read_payload(db, key)
    if data is not None and not isinstance(data, list):
        logger.warning("Stored payload is not a list, using defaults", extra={"storage_key": key})
        data = None
    if data is None:
        data = copy.deepcopy(list(default))
    if model is None:
        return data
    records = []
    for index, record in enumerate(data):
        try:
            records.append(model.model_validate(record))
        except ValidationError as exc:
            logger.warning(
                "Skipping stored record that failed validation",
                extra={"storage_key": key, "index": index, "errors": exc.error_count()},
            )
    return records


def save_collection(db: Session, key: str, records: Sequence[Any]) -> None:
    """Replace the whole collection. Flushes; the caller commits."""
    _write_payload(db, key, [_dump(record) for record in records])


def next_sequence(db: Session, name: str, floor: int = 0) -> int:
    """
    Issue the next value of a named monotonic counter.

    `floor` lets a counter that has never been stored start after ordinals
    already present in existing data.
    """
    counters = _read_payload(db, COUNTERS_KEY)
    if not isinstance(counters, dict):
        counters = {}
    try:
        current = int(counters.get(name, 0))
    except (TypeError, ValueError):
        current = 0
    value = max(current, floor) + 1
    counters[name] = value
    _write_payload(db, COUNTERS_KEY, counters)
    return value


def reset_to_seed(db: Session) -> None:
    for key, records in SEED_COLLECTIONS.items():
        save_collection(db, key, copy.deepcopy(records))
    _write_payload(db, COUNTERS_KEY, {})
    logger.info("Storage reset to seed data", extra={"keys": sorted(SEED_COLLECTIONS)})
