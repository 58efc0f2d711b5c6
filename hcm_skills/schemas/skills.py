from typing import Optional

from hcm_skills.models.enums import SkillLevel
from hcm_skills.schemas.base import BaseSchema
from hcm_skills.schemas.modules import ModuleRoutineSchema


class SkillClaimSchema(BaseSchema):
    """Autoavaliação de um colaborador em um módulo."""
    id: str
    collaborator_id: str
    module_id: str
    current_level: SkillLevel
    evidence: Optional[str] = None
    created_at: str
    updated_at: str


class SkillClaimWithModule(SkillClaimSchema):
    module: ModuleRoutineSchema


class SkillClaimInput(BaseSchema):
    """Dados gravados pelo upsert por (colaborador, módulo)."""
    collaborator_id: str
    module_id: str
    current_level: SkillLevel
    evidence: Optional[str] = None


class SkillClaimPayload(BaseSchema):
    """Corpo de POST /skills/claim; o colaborador vem do usuário autenticado."""
    module_id: str
    current_level: SkillLevel
    evidence: Optional[str] = None


class SkillClaimUpdate(BaseSchema):
    """Atualização parcial: campos omitidos ficam inalterados."""
    current_level: Optional[SkillLevel] = None
    evidence: Optional[str] = None
