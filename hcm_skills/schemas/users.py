from typing import Optional

from pydantic import Field

from hcm_skills.models.enums import Role
from hcm_skills.schemas.base import BaseSchema


class UserRecord(BaseSchema):
    """Usuário completo, incluindo o hash da senha. Uso interno."""
    id: str
    email: str
    password_hash: str
    role: Role
    must_change_password: bool
    created_at: str
    updated_at: str


class UserSummary(BaseSchema):
    """Dados públicos do usuário."""
    id: str
    email: str
    role: Role
    must_change_password: bool


class UserCreate(BaseSchema):
    """Esquema para criação de usuários."""
    email: str
    password_hash: str
    role: Role = Role.COLABORADOR
    must_change_password: bool = False


class UserUpdate(BaseSchema):
    """Esquema para atualização parcial de usuários."""
    email: Optional[str] = None
    password_hash: Optional[str] = None
    role: Optional[Role] = None
    must_change_password: Optional[bool] = None


class LoginRequest(BaseSchema):
    """Esquema para login de usuários."""
    # Texto livre: o administrador padrão usa o domínio reservado .local
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)


class LoginResponse(BaseSchema):
    access_token: str
    user: UserSummary


class ChangePasswordRequest(BaseSchema):
    current_password: str = Field(min_length=6)
    new_password: str = Field(min_length=8)
