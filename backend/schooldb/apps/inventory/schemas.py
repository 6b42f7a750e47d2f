from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field

from schooldb.schemas import StoredModel

CATEGORIES = [
    "Office Supplies",
    "Teaching Materials",
    "Computer Equipment",
    "Housekeeping Supplies",
    "Sports Equipment",
    "Other",
]

DEFAULT_CATEGORY = "Other"
DEFAULT_UNIT = "piece"
DEFAULT_LOCATION = "-"


class Item(StoredModel):
    id: str
    code: str
    name: str
    category: str = DEFAULT_CATEGORY
    unit: str = DEFAULT_UNIT
    quantity: int = 0
    min_quantity: int = 0
    location: str = DEFAULT_LOCATION
    last_updated: Optional[date] = None


class ItemWrite(StoredModel):
    """
    Payload for creating or editing an item.

    Quantities are validated here, at the caller boundary; the service
    layer stores whatever it is given.
    """

    id: Optional[str] = None
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    unit: Optional[str] = None
    quantity: int = Field(0, ge=0)
    min_quantity: int = Field(0, ge=0)
    location: Optional[str] = None


class ItemRead(Item):
    low_stock: bool = False
