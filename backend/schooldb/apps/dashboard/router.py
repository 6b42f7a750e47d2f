from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schooldb.apps.accounts.schemas import User
from schooldb.database import get_read_db
from schooldb.security import get_current_user

from . import schemas, services

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=schemas.DashboardSummary)
def read_dashboard(
    db: Session = Depends(get_read_db),
    current_user: User = Depends(get_current_user),
):
    return services.summary(db)
