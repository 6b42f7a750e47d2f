from __future__ import annotations

from sqlalchemy.orm import Session

from schooldb.apps.inventory import services as inventory_services
from schooldb.apps.requisitions import services as requisition_services
from schooldb.apps.requisitions.schemas import RequisitionStatus

from . import schemas

# COMPLETED is never produced, so it is not charted.
CHARTED_STATUSES = (
    RequisitionStatus.PENDING,
    RequisitionStatus.APPROVED,
    RequisitionStatus.REJECTED,
)


def summary(db: Session) -> schemas.DashboardSummary:
    items = inventory_services.list_items(db)
    requisitions = requisition_services.list_requisitions(db)

    stock_by_category = {}
    for item in items:
        stock_by_category[item.category] = stock_by_category.get(item.category, 0) + item.quantity

    by_status = {s.value: 0 for s in CHARTED_STATUSES}
    for requisition in requisitions:
        if requisition.status.value in by_status:
            by_status[requisition.status.value] += 1

    return schemas.DashboardSummary(
        total_items=len(items),
        low_stock=sum(1 for item in items if inventory_services.is_low_stock(item)),
        pending=by_status[RequisitionStatus.PENDING.value],
        approved=by_status[RequisitionStatus.APPROVED.value],
        stock_by_category=stock_by_category,
        requisitions_by_status=by_status,
    )
