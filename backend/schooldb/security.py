# backend/schooldb/security.py

"""
Session helpers for schooldb.

Responsibilities:
- Resolve the acting user from the `X-Username` request header
- Role-based access helpers for router dependencies

There is no credential check: the username only selects whose session
this is. Roles are still enforced here, at the operation layer, and not
only by whatever navigation a client chooses to render.
"""

from __future__ import annotations

from typing import Callable, Optional, Set, Union

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from .database import get_db
from schooldb.apps.accounts import services as account_services
from schooldb.apps.accounts.schemas import Role, User

USERNAME_HEADER = "X-Username"


def _unknown_user_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unknown username",
    )


def get_current_user(
    username: Optional[str] = Header(None, alias=USERNAME_HEADER),
    db: Session = Depends(get_db),
) -> User:
    if not username:
        raise _unknown_user_exception()
    user = account_services.login(db, username)
    if user is None:
        raise _unknown_user_exception()
    return user


def require_roles(
    *allowed_roles: Union[Role, str],
) -> Callable[[User], User]:
    """
    Dependency factory to enforce that the current user has one of the given roles.

    Usage:
        @router.post(...)
        def endpoint(current_user: User = Depends(require_roles(Role.ADMIN))):
            ...
    """
    normalised_roles: Set[Role] = set()
    for r in allowed_roles:
        if isinstance(r, Role):
            normalised_roles.add(r)
        else:
            try:
                normalised_roles.add(Role(r))
            except ValueError:
                raise ValueError(f"Unknown role {r!r} passed to require_roles()")

    def dependency(
        current_user: User = Depends(get_current_user),
    ) -> User:
        if current_user.role not in normalised_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions for this operation",
            )
        return current_user

    return dependency


require_admin = require_roles(Role.ADMIN)
