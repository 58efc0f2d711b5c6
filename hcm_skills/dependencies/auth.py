from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.models.enums import Role
from hcm_skills.repositories import UsersRepository
from hcm_skills.schemas import UserSummary
from hcm_skills.services.auth_service import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> UserSummary:
    """
    Obtém o usuário atual a partir do token JWT (cabeçalho Authorization: Bearer).

    O usuário é relido do banco para refletir papel e troca de senha atuais.

    Args:
        credentials: Esquema e token do cabeçalho Authorization
        db: Sessão do banco de dados

    Returns:
        Dados do usuário autenticado

    Raises:
        HTTPException: 401 se o token estiver ausente, inválido ou o usuário não existir
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Token de autenticacao ausente.")

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise _unauthorized("Token invalido.")

    user = UsersRepository(db).find_summary_by_id(payload["sub"])
    if user is None:
        raise _unauthorized("Usuario nao encontrado.")

    return user


def require_roles(*allowed_roles: Role):
    """
    Dependência para verificar se o usuário possui um dos papéis permitidos.

    Args:
        allowed_roles: Papéis aceitos pela rota

    Returns:
        Uma dependência que pode ser usada em rotas protegidas
    """
    def role_checker(user: UserSummary = Depends(get_current_user)) -> UserSummary:
        if user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Acesso negado.",
            )
        return user

    return role_checker
