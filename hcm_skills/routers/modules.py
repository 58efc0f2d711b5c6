from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import require_roles
from hcm_skills.models.enums import Role
from hcm_skills.repositories import ModulesRepository
from hcm_skills.schemas import (
    ModuleCreate,
    ModuleFilters,
    ModuleRoutineSchema,
    ModuleUpdate,
    PageParams,
    Paginated,
    UserSummary,
)

router = APIRouter(
    prefix="/modules",
    tags=["modules"],
)


@router.post("", response_model=ModuleRoutineSchema, status_code=status.HTTP_201_CREATED)
async def create_module(
    payload: ModuleCreate,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    repo = ModulesRepository(db)
    if repo.find_by_code(payload.code) is not None:
        raise HTTPException(status_code=409, detail="Já existe um módulo com este código.")
    return repo.create(payload)


@router.get("", response_model=Paginated[ModuleRoutineSchema])
async def list_modules(
    user: UserSummary = Depends(require_roles(Role.MASTER, Role.COLABORADOR)),
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100, alias="perPage"),
    code: Optional[List[str]] = Query(None),
    description: Optional[str] = Query(None),
):
    """Lista módulos; ``code`` aceita vários valores (repetidos ou separados por vírgula)."""
    repo = ModulesRepository(db)
    return repo.list(
        PageParams(page=page, per_page=per_page),
        ModuleFilters(codes=code or [], description=description),
    )


@router.get("/{module_id}", response_model=ModuleRoutineSchema)
async def get_module(
    module_id: str,
    user: UserSummary = Depends(require_roles(Role.MASTER, Role.COLABORADOR)),
    db: Session = Depends(get_db),
):
    module = ModulesRepository(db).find_by_id(module_id)
    if module is None:
        raise HTTPException(status_code=404, detail="Módulo não encontrado.")
    return module


@router.put("/{module_id}", response_model=ModuleRoutineSchema)
async def update_module(
    module_id: str,
    payload: ModuleCreate,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    repo = ModulesRepository(db)
    same_code = repo.find_by_code(payload.code)
    if same_code is not None and same_code.id != module_id:
        raise HTTPException(status_code=409, detail="Já existe um módulo com este código.")

    module = repo.update(module_id, ModuleUpdate(**payload.model_dump(exclude_unset=True)))
    if module is None:
        raise HTTPException(status_code=404, detail="Módulo não encontrado.")
    return module


@router.delete("/{module_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_module(
    module_id: str,
    user: UserSummary = Depends(require_roles(Role.MASTER)),
    db: Session = Depends(get_db),
):
    if not ModulesRepository(db).delete(module_id):
        raise HTTPException(status_code=404, detail="Módulo não encontrado.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
