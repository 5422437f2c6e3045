from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from qbank_admin.infrastructure.repositories.dashboard_repository import DashboardRepository
from qbank_admin.presentation.dependencies import get_db
from qbank_admin.presentation.schemas.dashboard_schema import DashboardStatsOut

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsOut)
def dashboard_stats(db: Session = Depends(get_db)):
    return DashboardRepository(db).get_dashboard_stats()
