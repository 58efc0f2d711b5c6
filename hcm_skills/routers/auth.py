from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from hcm_skills.db import get_db
from hcm_skills.dependencies import get_current_user
from hcm_skills.errors import DomainError
from hcm_skills.routers.errors import to_http_exception
from hcm_skills.schemas import ChangePasswordRequest, LoginRequest, LoginResponse, UserSummary
from hcm_skills.services import AuthService

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
):
    """Autentica por email e senha e devolve o token de acesso."""
    auth_service = AuthService(db)
    success, user = auth_service.authenticate(payload.email, payload.password)
    if not success or user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return LoginResponse(
        access_token=auth_service.issue_token(user),
        user=UserSummary(
            id=user.id,
            email=user.email,
            role=user.role,
            must_change_password=user.must_change_password,
        ),
    )


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    payload: ChangePasswordRequest,
    user: UserSummary = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        changed = AuthService(db).change_password(user.id, payload.current_password, payload.new_password)
    except DomainError as e:
        raise to_http_exception(e)
    if not changed:
        raise HTTPException(status_code=404, detail="Usuário não encontrado.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
