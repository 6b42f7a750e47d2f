from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from schooldb.database import get_db
from schooldb.errors import NotFound
from schooldb.security import get_current_user, require_admin

from . import schemas, services

router = APIRouter(prefix="", tags=["accounts"])


@router.post("/auth/login", response_model=schemas.User)
def login(
    payload: schemas.LoginRequest,
    db: Session = Depends(get_db),
):
    user = services.login(db, payload.username)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown username")
    return user


@router.get("/auth/me", response_model=schemas.User)
def read_me(current_user: schemas.User = Depends(get_current_user)):
    return current_user


@router.get("/users", response_model=List[schemas.User])
def list_users(
    q: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_admin),
):
    return services.search_users(db, q or "")


@router.post("/users", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: schemas.UserWrite,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_admin),
):
    data = payload.model_dump()
    data["id"] = data.get("id") or services.new_user_id()
    user = services.upsert_user(db, schemas.User(**data))
    db.commit()
    return user


@router.put("/users/{user_id}", response_model=schemas.User)
def update_user(
    user_id: str,
    payload: schemas.UserWrite,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_admin),
):
    try:
        services.get_user(db, user_id)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    user = services.upsert_user(db, schemas.User(**{**payload.model_dump(), "id": user_id}))
    db.commit()
    return user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_admin),
):
    try:
        services.remove_user(db, user_id)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    db.commit()
    return None
