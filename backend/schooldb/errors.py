"""
Domain errors raised by the store services.

Routers translate these into HTTP responses; scripts and tests catch them
directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


class StoreError(Exception):
    """Base class for store-level failures."""


class NotFound(StoreError):
    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id!r} not found")


@dataclass
class InsufficientStock(StoreError):
    """
    Approval refused because at least one line cannot be covered.

    `shortfalls` lists every failing line, not only the first one, as
    dicts with item_id, item_name, requested and available (None when the
    item no longer exists).
    """

    requisition_id: str
    shortfalls: List[Dict[str, object]] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Insufficient stock to approve requisition {self.requisition_id}"
