from typing import Optional

from hcm_skills.models.enums import SkillLevel
from hcm_skills.schemas.base import BaseSchema
from hcm_skills.schemas.modules import ModuleRoutineSchema


class ManagerAssessmentSchema(BaseSchema):
    """Nível-alvo definido pelo gestor."""
    id: str
    collaborator_id: str
    module_id: str
    target_level: SkillLevel
    comment: Optional[str] = None
    created_at: str
    updated_at: str


class ManagerAssessmentWithModule(ManagerAssessmentSchema):
    module: ModuleRoutineSchema


class AssessmentInput(BaseSchema):
    """Dados gravados pelo upsert por (colaborador, módulo)."""
    collaborator_id: str
    module_id: str
    target_level: SkillLevel
    comment: Optional[str] = None
