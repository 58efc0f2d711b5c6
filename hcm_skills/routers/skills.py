from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import require_roles
from hcm_skills.models.enums import Role
from hcm_skills.repositories import CollaboratorsRepository, ModulesRepository, SkillClaimsRepository
from hcm_skills.routers.profile import ensure_exists, own_profile
from hcm_skills.schemas import (
    SkillClaimInput,
    SkillClaimPayload,
    SkillClaimUpdate,
    SkillClaimWithModule,
    UserSummary,
)

router = APIRouter(
    prefix="/skills",
    tags=["skills"],
)


@router.post("/claim", response_model=SkillClaimWithModule, status_code=status.HTTP_201_CREATED)
async def upsert_claim(
    payload: SkillClaimPayload,
    user: UserSummary = Depends(require_roles(Role.COLABORADOR)),
    db: Session = Depends(get_db),
):
    """Registra (ou substitui) a autoavaliação do colaborador autenticado para o módulo."""
    profile = own_profile(db, user)
    ensure_exists(ModulesRepository(db).find_by_id(payload.module_id), "Módulo não encontrado.")

    return SkillClaimsRepository(db).upsert(
        SkillClaimInput(
            collaborator_id=profile.id,
            module_id=payload.module_id,
            current_level=payload.current_level,
            evidence=payload.evidence,
        )
    )


@router.get("/claim", response_model=List[SkillClaimWithModule])
async def list_claims(
    user: UserSummary = Depends(require_roles(Role.COLABORADOR, Role.MASTER)),
    db: Session = Depends(get_db),
    me: bool = Query(False),
    collaborator_id: Optional[str] = Query(None, alias="collaboratorId"),
):
    """
    Lista autoavaliações.

    O colaborador vê sempre as próprias; o gestor pode filtrar por
    ``collaboratorId`` ou pedir as do próprio perfil com ``me=true``.
    """
    target = collaborator_id
    if user.role == Role.COLABORADOR:
        target = own_profile(db, user).id
    elif me:
        profile = CollaboratorsRepository(db).find_by_user_id(user.id)
        target = profile.id if profile else None

    return SkillClaimsRepository(db).list(collaborator_id=target, include_module=True)


@router.put("/claim/{claim_id}", response_model=SkillClaimWithModule)
async def update_claim(
    claim_id: str,
    payload: SkillClaimUpdate,
    user: UserSummary = Depends(require_roles(Role.COLABORADOR)),
    db: Session = Depends(get_db),
):
    profile = own_profile(db, user)
    repo = SkillClaimsRepository(db)

    existing = repo.find_by_id(claim_id)
    if existing is None or existing.collaborator_id != profile.id:
        raise HTTPException(status_code=404, detail="Registro não encontrado.")

    claim = repo.update(claim_id, payload)
    ensure_exists(claim, "Registro não encontrado.")
    return claim
