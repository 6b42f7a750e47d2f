# backend/schooldb/apps/accounts/schemas.py

from __future__ import annotations

import enum
from typing import Optional

from pydantic import Field

from schooldb.schemas import StoredModel


class Role(str, enum.Enum):
    """Roles used across the tracker."""

    ADMIN = "ADMIN"      # manage items and personnel, approve / reject
    STAFF = "STAFF"      # submit requisitions, view own history
    VIEWER = "VIEWER"    # read-only dashboard and reports


class User(StoredModel):
    id: str
    username: str
    fullname: str
    position: str = ""
    department: str = ""
    role: Role


class UserWrite(StoredModel):
    """Payload for creating or editing a user; a blank id creates."""

    id: Optional[str] = None
    username: str = Field(..., min_length=1)
    fullname: str = Field(..., min_length=1)
    position: str = ""
    department: str = ""
    role: Role


class LoginRequest(StoredModel):
    username: str
