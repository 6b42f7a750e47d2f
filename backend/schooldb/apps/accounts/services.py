from __future__ import annotations

import logging
import time
from typing import List, Optional

from sqlalchemy.orm import Session

from schooldb.apps.storage import services as storage
from schooldb.errors import NotFound

from . import schemas

logger = logging.getLogger(__name__)


def new_user_id() -> str:
    return f"u{int(time.time() * 1000)}"


def list_users(db: Session) -> List[schemas.User]:
    return storage.load_collection(db, storage.USERS_KEY, storage.SEED_COLLECTIONS[storage.USERS_KEY], schemas.User)


def get_user(db: Session, user_id: str) -> schemas.User:
    for user in list_users(db):
        if user.id == user_id:
            return user
    raise NotFound("user", user_id)


def upsert_user(db: Session, user: schemas.User) -> schemas.User:
    """
    Replace the user with the same id in place, or append a new one.

    Usernames are not checked for uniqueness; `login` resolves to the
    first match.
    """
    users = list_users(db)
    for idx, existing in enumerate(users):
        if existing.id == user.id:
            users[idx] = user
            break
    else:
        users.append(user)
    storage.save_collection(db, storage.USERS_KEY, users)
    return user


def remove_user(db: Session, user_id: str) -> None:
    # Requisitions keep their requester snapshot, so no reference check here.
    users = list_users(db)
    remaining = [u for u in users if u.id != user_id]
    if len(remaining) == len(users):
        raise NotFound("user", user_id)
    storage.save_collection(db, storage.USERS_KEY, remaining)
    logger.info("User removed", extra={"user_id": user_id})


def login(db: Session, username: str) -> Optional[schemas.User]:
    """Exact, case-sensitive username lookup. Selects a session, nothing more."""
    for user in list_users(db):
        if user.username == username:
            return user
    return None


def search_users(db: Session, query: str = "") -> List[schemas.User]:
    users = list_users(db)
    if not query:
        return users
    return [
        u
        for u in users
        if query in u.fullname or query in u.username or query in u.department
    ]
