from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from schooldb.apps.accounts.schemas import User
from schooldb.database import get_db
from schooldb.errors import NotFound
from schooldb.security import get_current_user, require_admin

from . import schemas, services

router = APIRouter(prefix="/items", tags=["inventory"])


@router.get("", response_model=List[schemas.ItemRead])
def list_items(
    q: Optional[str] = None,
    category: Optional[str] = None,
    low_stock: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items = services.search_items(db, q or "", category=category, low_stock=low_stock)
    return [services.to_read(item) for item in items]


@router.get("/categories", response_model=List[str])
def list_categories(current_user: User = Depends(get_current_user)):
    return schemas.CATEGORIES


@router.get("/{item_id}", response_model=schemas.ItemRead)
def get_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return services.to_read(services.get_item(db, item_id))
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post("", response_model=schemas.ItemRead, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: schemas.ItemWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    item = services.upsert_item(db, services.item_from_payload(payload))
    db.commit()
    return services.to_read(item)


@router.put("/{item_id}", response_model=schemas.ItemRead)
def update_item(
    item_id: str,
    payload: schemas.ItemWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        services.get_item(db, item_id)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    item = services.upsert_item(db, services.item_from_payload(payload, item_id=item_id))
    db.commit()
    return services.to_read(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        services.remove_item(db, item_id)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    db.commit()
    return None
