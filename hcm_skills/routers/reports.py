from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import require_roles
from hcm_skills.models.enums import Role
from hcm_skills.routers.profile import own_profile
from hcm_skills.schemas import CoverageEntry, UserSummary
from hcm_skills.services import ReportingService
from hcm_skills.services.reporting_service import render_coverage_csv

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
)


@router.get("/coverage", response_model=List[CoverageEntry])
async def coverage(
    user: UserSummary = Depends(require_roles(Role.MASTER, Role.COLABORADOR)),
    db: Session = Depends(get_db),
    collaborator_id: Optional[str] = Query(None, alias="collaboratorId"),
    output_format: Literal["json", "csv"] = Query("json", alias="format"),
):
    """
    Relatório de cobertura de um colaborador, em JSON ou CSV.

    O colaborador recebe sempre o próprio relatório; o gestor precisa
    informar ``collaboratorId``.
    """
    target = collaborator_id
    if user.role == Role.COLABORADOR:
        target = own_profile(db, user).id

    if not target:
        raise HTTPException(status_code=400, detail="Informe um colaborador para gerar o relatório.")

    entries = ReportingService(db).coverage(target)
    if entries is None:
        raise HTTPException(status_code=404, detail="Colaborador não encontrado.")

    if output_format == "csv":
        return Response(content=render_coverage_csv(entries), media_type="text/csv")
    return entries
