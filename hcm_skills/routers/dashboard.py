from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import require_roles
from hcm_skills.models.enums import Role
from hcm_skills.schemas import DashboardKpis, DashboardTrends, UserSummary
from hcm_skills.services import ReportingService

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("/kpis", response_model=DashboardKpis)
async def kpis(
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    return ReportingService(db).kpis()


@router.get("/trends", response_model=DashboardTrends)
async def trends(
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    return ReportingService(db).trends()
