from __future__ import annotations

import logging
import time
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from schooldb.apps.storage import services as storage
from schooldb.errors import NotFound

from . import schemas

logger = logging.getLogger(__name__)


def new_item_id() -> str:
    return f"i{int(time.time() * 1000)}"


def is_low_stock(item: schemas.Item) -> bool:
    """Derived condition, never stored: at or below the reorder threshold."""
    return item.quantity <= item.min_quantity


def list_items(db: Session) -> List[schemas.Item]:
    return storage.load_collection(db, storage.ITEMS_KEY, storage.SEED_COLLECTIONS[storage.ITEMS_KEY], schemas.Item)


def save_items(db: Session, items: List[schemas.Item]) -> None:
    storage.save_collection(db, storage.ITEMS_KEY, items)


def get_item(db: Session, item_id: str) -> schemas.Item:
    for item in list_items(db):
        if item.id == item_id:
            return item
    raise NotFound("item", item_id)


def upsert_item(db: Session, item: schemas.Item) -> schemas.Item:
    """
    Replace by id or append. `last_updated` is always stamped with today,
    whatever the caller supplied.
    """
    stamped = item.model_copy(update={"last_updated": date.today()})
    items = list_items(db)
    for idx, existing in enumerate(items):
        if existing.id == stamped.id:
            items[idx] = stamped
            break
    else:
        items.append(stamped)
    save_items(db, items)
    return stamped


def remove_item(db: Session, item_id: str) -> None:
    # Pending requisitions may still name the item; readers must tolerate that.
    items = list_items(db)
    remaining = [i for i in items if i.id != item_id]
    if len(remaining) == len(items):
        raise NotFound("item", item_id)
    save_items(db, remaining)
    logger.info("Item removed", extra={"item_id": item_id})


def list_low_stock(db: Session) -> List[schemas.Item]:
    return [item for item in list_items(db) if is_low_stock(item)]


def search_items(
    db: Session,
    query: str = "",
    *,
    category: Optional[str] = None,
    low_stock: Optional[bool] = None,
) -> List[schemas.Item]:
    results = []
    for item in list_items(db):
        if query and query not in item.name and query not in item.code:
            continue
        if category and item.category != category:
            continue
        if low_stock is not None and is_low_stock(item) != low_stock:
            continue
        results.append(item)
    return results


def item_from_payload(payload: schemas.ItemWrite, *, item_id: Optional[str] = None) -> schemas.Item:
    return schemas.Item(
        id=item_id or payload.id or new_item_id(),
        code=payload.code,
        name=payload.name,
        category=payload.category or schemas.DEFAULT_CATEGORY,
        unit=payload.unit or schemas.DEFAULT_UNIT,
        quantity=payload.quantity,
        min_quantity=payload.min_quantity,
        location=payload.location or schemas.DEFAULT_LOCATION,
    )


def to_read(item: schemas.Item) -> schemas.ItemRead:
    return schemas.ItemRead(**item.model_dump(), low_stock=is_low_stock(item))
