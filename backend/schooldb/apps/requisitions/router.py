from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from schooldb.apps.accounts.schemas import Role, User
from schooldb.apps.inventory import services as inventory_services
from schooldb.apps.workflow import TransitionError
from schooldb.database import get_db
from schooldb.errors import InsufficientStock, NotFound
from schooldb.security import get_current_user, require_admin, require_roles

from . import schemas, services

router = APIRouter(prefix="/requisitions", tags=["requisitions"])

SUBMIT_ROLES = [Role.STAFF, Role.ADMIN]
READ_ALL_ROLES = {Role.ADMIN, Role.VIEWER}


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InsufficientStock):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": "insufficient_stock", "message": str(exc), "shortfalls": exc.shortfalls},
        )
    if isinstance(exc, TransitionError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": exc.code, "detail": exc.detail},
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=List[schemas.Requisition])
def list_requisitions(
    status_filter: Optional[schemas.RequisitionStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if current_user.role not in READ_ALL_ROLES:
        rows = services.list_for_requester(db, current_user.id)
        if status_filter is not None:
            rows = [r for r in rows if r.status == status_filter]
        return rows
    return services.list_requisitions(db, status_filter)


@router.get("/mine", response_model=List[schemas.Requisition])
def list_my_requisitions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return services.list_for_requester(db, current_user.id)


@router.get("/history", response_model=List[schemas.Requisition])
def list_decided_requisitions(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*READ_ALL_ROLES)),
):
    return services.list_decided(db)


@router.get("/{requisition_id}", response_model=schemas.Requisition)
def get_requisition(
    requisition_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        requisition = services.get_requisition(db, requisition_id)
    except NotFound as exc:
        raise _http_error(exc)
    if current_user.role not in READ_ALL_ROLES and requisition.requester_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"requisition {requisition_id!r} not found")
    return requisition


@router.post("", response_model=schemas.Requisition, status_code=status.HTTP_201_CREATED)
def submit_requisition(
    payload: schemas.RequisitionSubmit,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*SUBMIT_ROLES)),
):
    items_by_id = {item.id: item for item in inventory_services.list_items(db)}
    lines = []
    for line in payload.items:
        item = items_by_id.get(line.item_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown item {line.item_id}")
        if line.request_qty > item.quantity:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Only {item.quantity} {item.unit} of {item.name} in stock",
            )
        lines.append(
            schemas.RequisitionLine(item_id=item.id, item_name=item.name, request_qty=line.request_qty)
        )

    requisition = services.create_requisition(
        db,
        schemas.RequisitionCreate(
            requester_id=current_user.id,
            requester_name=current_user.fullname,
            department=current_user.department,
            reason=payload.reason,
            items=lines,
        ),
    )
    db.commit()
    return requisition


def _decide(
    db: Session,
    requisition_id: str,
    new_status: schemas.RequisitionStatus,
    note: Optional[str],
    current_user: User,
) -> schemas.Requisition:
    try:
        requisition = services.transition_requisition(
            db,
            requisition_id,
            new_status,
            note,
            actor_user_id=current_user.id,
        )
    except (NotFound, InsufficientStock, TransitionError) as exc:
        db.rollback()
        raise _http_error(exc)
    db.commit()
    return requisition


@router.post("/{requisition_id}/approve", response_model=schemas.Requisition)
def approve_requisition(
    requisition_id: str,
    payload: schemas.RequisitionDecision,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return _decide(db, requisition_id, schemas.RequisitionStatus.APPROVED, payload.note, current_user)


@router.post("/{requisition_id}/reject", response_model=schemas.Requisition)
def reject_requisition(
    requisition_id: str,
    payload: schemas.RequisitionDecision,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return _decide(db, requisition_id, schemas.RequisitionStatus.REJECTED, payload.note, current_user)
