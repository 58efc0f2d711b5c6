from fastapi import HTTPException
from sqlalchemy.orm import Session

from hcm_skills.errors import DomainError
from hcm_skills.routers.errors import to_http_exception
from hcm_skills.schemas import CollaboratorProfileSchema, UserSummary
from hcm_skills.services import CollaboratorAccessService


def own_profile(db: Session, user: UserSummary) -> CollaboratorProfileSchema:
    """Perfil do colaborador autenticado; 400 se o usuário não tiver perfil."""
    try:
        return CollaboratorAccessService(db).require_profile(user.id)
    except DomainError as e:
        raise to_http_exception(e)


def ensure_exists(found: object, detail: str) -> None:
    if found is None:
        raise HTTPException(status_code=404, detail=detail)
