from __future__ import annotations

import enum
from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator

from schooldb.schemas import StoredModel


class RequisitionStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class RequisitionLine(StoredModel):
    item_id: str
    item_name: str
    request_qty: int = Field(..., gt=0)


class Requisition(StoredModel):
    id: str
    requester_id: str
    requester_name: str
    department: str = ""
    request_date: date
    reason: str
    items: List[RequisitionLine]
    status: RequisitionStatus = RequisitionStatus.PENDING
    approver_note: Optional[str] = None
    approve_date: Optional[date] = None


class RequisitionCreate(StoredModel):
    """
    What the store needs to open a requisition. Requester fields are a
    snapshot, so history still reads correctly after the user is removed.
    """

    requester_id: str
    requester_name: str
    department: str = ""
    reason: str
    items: List[RequisitionLine]


class RequisitionLineRequest(StoredModel):
    item_id: str
    request_qty: int = Field(..., gt=0)


class RequisitionSubmit(StoredModel):
    """API payload; the requester is the acting user."""

    reason: str = Field(..., min_length=1)
    items: List[RequisitionLineRequest] = Field(..., min_length=1)

    @field_validator("reason")
    @classmethod
    def _reason_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("reason is required")
        return value

    @field_validator("items")
    @classmethod
    def _unique_items(cls, value: List[RequisitionLineRequest]) -> List[RequisitionLineRequest]:
        seen = set()
        for line in value:
            if line.item_id in seen:
                raise ValueError(f"item {line.item_id} listed more than once")
            seen.add(line.item_id)
        return value


class RequisitionDecision(StoredModel):
    note: Optional[str] = None
