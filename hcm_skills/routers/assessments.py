from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import require_roles
from hcm_skills.models.enums import Role
from hcm_skills.repositories import (
    AssessmentsRepository,
    CareerPlansRepository,
    CollaboratorsRepository,
    ModulesRepository,
)
from hcm_skills.routers.profile import ensure_exists, own_profile
from hcm_skills.schemas import (
    AssessmentInput,
    CareerPlanCreate,
    CareerPlanUpdate,
    CareerPlanWithModules,
    ManagerAssessmentWithModule,
    UserSummary,
)

router = APIRouter(
    prefix="/assessments",
    tags=["assessments"],
)

PLAN_NOT_FOUND = "Plano de carreira não encontrado."


def _check_references(db: Session, collaborator_id: Optional[str], module_ids: List[str]) -> None:
    if collaborator_id is not None:
        ensure_exists(CollaboratorsRepository(db).get(collaborator_id), "Colaborador não encontrado.")
    modules = ModulesRepository(db)
    for module_id in module_ids:
        ensure_exists(modules.get(module_id), "Módulo não encontrado.")


@router.post("", response_model=ManagerAssessmentWithModule, status_code=status.HTTP_201_CREATED)
async def upsert_assessment(
    payload: AssessmentInput,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    """Registra (ou substitui) o nível-alvo do colaborador para o módulo."""
    _check_references(db, payload.collaborator_id, [payload.module_id])
    return AssessmentsRepository(db).upsert(payload)


@router.get("", response_model=List[ManagerAssessmentWithModule])
async def list_assessments(
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
    collaborator_id: Optional[str] = Query(None, alias="collaboratorId"),
):
    return AssessmentsRepository(db).list(collaborator_id=collaborator_id)


@router.post("/career-plans", response_model=CareerPlanWithModules, status_code=status.HTTP_201_CREATED)
async def create_career_plan(
    payload: CareerPlanCreate,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    _check_references(db, payload.collaborator_id, payload.module_ids)
    return CareerPlansRepository(db).create(payload)


@router.get("/career-plans", response_model=List[CareerPlanWithModules])
async def list_career_plans(
    user: UserSummary = Depends(require_roles(Role.MASTER, Role.COLABORADOR)),
    db: Session = Depends(get_db),
    collaborator_id: Optional[str] = Query(None, alias="collaboratorId"),
):
    """Lista planos, mais recentes primeiro. O colaborador vê apenas os próprios."""
    target = collaborator_id
    if user.role == Role.COLABORADOR:
        target = own_profile(db, user).id
    return CareerPlansRepository(db).list(collaborator_id=target)


@router.put("/career-plans/{plan_id}", response_model=CareerPlanWithModules)
async def update_career_plan(
    plan_id: str,
    payload: CareerPlanUpdate,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True)
    has_scalar_updates = any(field != "module_ids" for field in changes)
    if not has_scalar_updates and payload.module_ids is None:
        raise HTTPException(status_code=400, detail="Informe pelo menos um campo para atualizar.")

    _check_references(db, payload.collaborator_id, payload.module_ids or [])
    plan = CareerPlansRepository(db).update(plan_id, payload)
    ensure_exists(plan, PLAN_NOT_FOUND)
    return plan


@router.delete("/career-plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_career_plan(
    plan_id: str,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    if not CareerPlansRepository(db).delete(plan_id):
        raise HTTPException(status_code=404, detail=PLAN_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
