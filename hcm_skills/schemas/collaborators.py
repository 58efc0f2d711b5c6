from datetime import datetime
from typing import List, Optional, Union

from pydantic import EmailStr, Field, model_validator

from hcm_skills.schemas.assessments import ManagerAssessmentSchema
from hcm_skills.schemas.base import BaseSchema
from hcm_skills.schemas.career_plans import CareerPlanSchema
from hcm_skills.schemas.skills import SkillClaimSchema


class LinkedUser(BaseSchema):
    id: str
    email: str


class CollaboratorProfileSchema(BaseSchema):
    """Esquema para representação de colaboradores."""
    id: str
    user_id: Optional[str] = None
    full_name: str
    admission_date: str
    activities: List[str] = []
    notes: Optional[str] = None
    created_at: str
    updated_at: str


class CollaboratorWithUser(CollaboratorProfileSchema):
    """Colaborador com o usuário vinculado, quando houver."""
    user: Optional[LinkedUser] = None


class CollaboratorDetail(CollaboratorWithUser):
    """Colaborador com autoavaliações, avaliações e planos de carreira."""
    skill_claims: List[SkillClaimSchema] = []
    assessments: List[ManagerAssessmentSchema] = []
    career_plans: List[CareerPlanSchema] = []


class CollaboratorInput(BaseSchema):
    """Dados gravados pelo repositório de colaboradores."""
    full_name: str
    admission_date: Union[datetime, str]
    activities: List[str] = []
    notes: Optional[str] = None
    user_id: Optional[str] = None


class CollaboratorPayload(BaseSchema):
    """Corpo de criação/atualização de colaboradores, com o pedido opcional de acesso."""
    full_name: str = Field(min_length=3)
    admission_date: datetime
    activities: List[str] = []
    notes: Optional[str] = None
    user_id: Optional[str] = None
    create_access: bool = False
    access_email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def _access_email_when_creating_access(self) -> "CollaboratorPayload":
        if self.create_access and not self.access_email:
            raise ValueError("Informe um e-mail válido para criar o acesso.")
        return self

    def to_input(self, user_id: Optional[str]) -> CollaboratorInput:
        return CollaboratorInput(
            full_name=self.full_name,
            admission_date=self.admission_date,
            activities=self.activities,
            notes=self.notes,
            user_id=user_id,
        )


class CollaboratorFilters(BaseSchema):
    name: Optional[str] = None
    activity: Optional[str] = None


class AccessCredentials(BaseSchema):
    """Credenciais de uso único, devolvidas apenas na resposta que as gerou."""
    email: str
    temporary_password: str


class CollaboratorWriteResponse(BaseSchema):
    collaborator: CollaboratorWithUser
    access_credentials: Optional[AccessCredentials] = None


class ResetAccessResponse(BaseSchema):
    access_credentials: AccessCredentials
