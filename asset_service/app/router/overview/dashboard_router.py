from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_any_user
from shared.core.database import get_asset_db as get_db
from ...crud.overview import dashboard_crud
from ...schemas.dashboard_schema import DashboardSummary

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(allow_any_user)]
)


@router.get("/summary", response_model=DashboardSummary)
def get_summary(db: Session = Depends(get_db)):
    return dashboard_crud.get_dashboard_summary(db)
