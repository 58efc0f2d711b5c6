from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import require_roles
from hcm_skills.errors import DomainError
from hcm_skills.models.enums import Role
from hcm_skills.repositories import CollaboratorsRepository
from hcm_skills.routers.errors import to_http_exception
from hcm_skills.schemas import (
    CollaboratorDetail,
    CollaboratorFilters,
    CollaboratorPayload,
    CollaboratorWithUser,
    CollaboratorWriteResponse,
    PageParams,
    Paginated,
    ResetAccessResponse,
    UserSummary,
)
from hcm_skills.services import CollaboratorAccessService

router = APIRouter(
    prefix="/collaborators",
    tags=["collaborators"],
)

NOT_FOUND = "Colaborador não encontrado."


@router.post("", response_model=CollaboratorWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_collaborator(
    payload: CollaboratorPayload,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    """Cria o colaborador e, com ``createAccess``, o usuário com senha temporária."""
    try:
        collaborator, credentials = CollaboratorAccessService(db).create_collaborator(payload)
    except DomainError as e:
        raise to_http_exception(e)
    return CollaboratorWriteResponse(collaborator=collaborator, access_credentials=credentials)


@router.get("", response_model=Paginated[CollaboratorWithUser])
async def list_collaborators(
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100, alias="perPage"),
    name: Optional[str] = Query(None),
    activity: Optional[str] = Query(None),
):
    return CollaboratorsRepository(db).list(
        PageParams(page=page, per_page=per_page),
        CollaboratorFilters(name=name, activity=activity),
    )


@router.get("/{collaborator_id}", response_model=CollaboratorDetail)
async def get_collaborator(
    collaborator_id: str,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    collaborator = CollaboratorsRepository(db).find_detail(collaborator_id)
    if collaborator is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return collaborator


@router.put("/{collaborator_id}", response_model=CollaboratorWriteResponse)
async def update_collaborator(
    collaborator_id: str,
    payload: CollaboratorPayload,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    try:
        result = CollaboratorAccessService(db).update_collaborator(collaborator_id, payload)
    except DomainError as e:
        raise to_http_exception(e)
    if result is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    collaborator, credentials = result
    return CollaboratorWriteResponse(collaborator=collaborator, access_credentials=credentials)


@router.delete("/{collaborator_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_collaborator(
    collaborator_id: str,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    """Remove o colaborador e o usuário vinculado."""
    if not CollaboratorAccessService(db).delete_collaborator_and_access(collaborator_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{collaborator_id}/reset-access", response_model=ResetAccessResponse)
async def reset_access(
    collaborator_id: str,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    try:
        credentials = CollaboratorAccessService(db).reset_access(collaborator_id)
    except DomainError as e:
        raise to_http_exception(e)
    if credentials is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ResetAccessResponse(access_credentials=credentials)
