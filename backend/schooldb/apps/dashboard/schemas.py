from __future__ import annotations

from typing import Dict

from schooldb.schemas import StoredModel


class DashboardSummary(StoredModel):
    total_items: int
    low_stock: int
    pending: int
    approved: int
    stock_by_category: Dict[str, int]
    requisitions_by_status: Dict[str, int]
