from __future__ import annotations

import logging
import os
import re
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from schooldb.apps.inventory import schemas as inventory_schemas
from schooldb.apps.inventory import services as inventory_services
from schooldb.apps.storage import services as storage
from schooldb.apps.workflow import apply_transition, check_transition
from schooldb.errors import InsufficientStock, NotFound

from . import schemas

logger = logging.getLogger(__name__)

REQUISITION_ID_PREFIX = os.getenv("REQUISITION_ID_PREFIX", "R-2566-")
try:
    REQUISITION_ID_WIDTH = int(os.getenv("REQUISITION_ID_WIDTH", "3"))
except ValueError:
    REQUISITION_ID_WIDTH = 3

SEQUENCE_NAME = "requisition"
WORKFLOW = "requisition"


def list_requisitions(
    db: Session,
    status: Optional[schemas.RequisitionStatus] = None,
) -> List[schemas.Requisition]:
    """All requisitions, newest first."""
    requisitions = storage.load_collection(
        db,
        storage.REQUISITIONS_KEY,
        storage.SEED_COLLECTIONS[storage.REQUISITIONS_KEY],
        schemas.Requisition,
    )
    if status is None:
        return requisitions
    return [r for r in requisitions if r.status == status]


def list_for_requester(db: Session, requester_id: str) -> List[schemas.Requisition]:
    return [r for r in list_requisitions(db) if r.requester_id == requester_id]


def list_pending(db: Session) -> List[schemas.Requisition]:
    return list_requisitions(db, schemas.RequisitionStatus.PENDING)


def list_decided(db: Session) -> List[schemas.Requisition]:
    return [r for r in list_requisitions(db) if r.status != schemas.RequisitionStatus.PENDING]


def get_requisition(db: Session, requisition_id: str) -> schemas.Requisition:
    for requisition in list_requisitions(db):
        if requisition.id == requisition_id:
            return requisition
    raise NotFound("requisition", requisition_id)


def _ordinal(requisition_id: str) -> int:
    if not requisition_id.startswith(REQUISITION_ID_PREFIX):
        return 0
    match = re.fullmatch(r"\d+", requisition_id[len(REQUISITION_ID_PREFIX):])
    return int(match.group(0)) if match else 0


def format_requisition_id(ordinal: int) -> str:
    return f"{REQUISITION_ID_PREFIX}{ordinal:0{REQUISITION_ID_WIDTH}d}"


def create_requisition(db: Session, payload: schemas.RequisitionCreate) -> schemas.Requisition:
    """
    Open a PENDING requisition dated today and put it at the front.

    Ids come from a stored counter. Its floor is the collection length
    or the highest ordinal already used, whichever is larger, so fresh
    data numbers exactly as length + 1 would and removals never reissue
    an id.
    """
    requisitions = list_requisitions(db)
    floor = max([len(requisitions)] + [_ordinal(r.id) for r in requisitions])
    ordinal = storage.next_sequence(db, SEQUENCE_NAME, floor=floor)

    requisition = schemas.Requisition(
        id=format_requisition_id(ordinal),
        requester_id=payload.requester_id,
        requester_name=payload.requester_name,
        department=payload.department,
        request_date=date.today(),
        reason=payload.reason,
        items=payload.items,
        status=schemas.RequisitionStatus.PENDING,
    )
    requisitions.insert(0, requisition)
    storage.save_collection(db, storage.REQUISITIONS_KEY, requisitions)
    logger.info(
        "Requisition created",
        extra={
            "requisition_id": requisition.id,
            "requester_id": requisition.requester_id,
            "lines": len(requisition.items),
        },
    )
    return requisition


def find_shortfalls(
    requisition: schemas.Requisition,
    items_by_id: Dict[str, inventory_schemas.Item],
) -> List[Dict[str, object]]:
    """
    Every item the current stock cannot cover. Reads only.

    Lines naming the same item are summed first, so stored data with a
    repeated item cannot approve past zero.
    """
    requested: Dict[str, int] = {}
    names: Dict[str, str] = {}
    for line in requisition.items:
        requested[line.item_id] = requested.get(line.item_id, 0) + line.request_qty
        names.setdefault(line.item_id, line.item_name)

    shortfalls: List[Dict[str, object]] = []
    for item_id, quantity in requested.items():
        item = items_by_id.get(item_id)
        if item is None or item.quantity < quantity:
            shortfalls.append(
                {
                    "item_id": item_id,
                    "item_name": names[item_id],
                    "requested": quantity,
                    "available": item.quantity if item is not None else None,
                }
            )
    return shortfalls


def transition_requisition(
    db: Session,
    requisition_id: str,
    new_status: schemas.RequisitionStatus,
    note: Optional[str] = None,
    *,
    actor_user_id: Optional[str] = None,
) -> schemas.Requisition:
    """
    Decide a PENDING requisition.

    Approval checks every line against stock before touching anything and
    raises InsufficientStock if any line falls short. Only then is stock
    deducted. Item and requisition collections are written through the
    same session, so the caller's single commit applies both or neither.
    """
    new_status = schemas.RequisitionStatus(new_status)
    requisitions = list_requisitions(db)
    idx = next((i for i, r in enumerate(requisitions) if r.id == requisition_id), None)
    if idx is None:
        raise NotFound("requisition", requisition_id)
    requisition = requisitions[idx]

    approve_date = date.today() if new_status == schemas.RequisitionStatus.APPROVED else None
    updated = requisition.model_copy(
        update={"status": new_status, "approver_note": note, "approve_date": approve_date}
    )

    transition = dict(
        actor_user_id=actor_user_id,
        entity_type=WORKFLOW,
        entity_id=requisition.id,
        from_state=requisition.status.value,
        to_state=new_status.value,
        before_obj=requisition,
        after_obj=updated,
    )
    check_transition(**transition)

    if new_status == schemas.RequisitionStatus.APPROVED:
        items = inventory_services.list_items(db)
        items_by_id = {item.id: item for item in items}
        shortfalls = find_shortfalls(requisition, items_by_id)
        if shortfalls:
            logger.warning(
                "Approval refused, insufficient stock",
                extra={"requisition_id": requisition.id, "shortfalls": shortfalls},
            )
            raise InsufficientStock(requisition_id=requisition.id, shortfalls=shortfalls)

        for line in requisition.items:
            item = items_by_id[line.item_id]
            item.quantity -= line.request_qty
        inventory_services.save_items(db, items)

    apply_transition(**transition)
    requisitions[idx] = updated
    storage.save_collection(db, storage.REQUISITIONS_KEY, requisitions)
    logger.info(
        "Requisition decided",
        extra={
            "requisition_id": requisition.id,
            "status": new_status.value,
            "actor_user_id": actor_user_id,
        },
    )
    return updated
