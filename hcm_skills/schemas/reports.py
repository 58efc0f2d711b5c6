from typing import List, Optional

from hcm_skills.models.enums import SkillLevel
from hcm_skills.schemas.base import BaseSchema


class DashboardKpis(BaseSchema):
    total_collaborators: int
    total_modules: int
    total_claims: int
    total_assessments: int
    average_gap: float


class LevelCount(BaseSchema):
    level: SkillLevel
    count: int


class ModuleGap(BaseSchema):
    module_id: str
    module_code: str
    module_description: str
    gap: Optional[float] = None


class DashboardTrends(BaseSchema):
    level_distribution: List[LevelCount]
    gap_by_module: List[ModuleGap]
    top_gaps: List[ModuleGap]


class CoverageEntry(BaseSchema):
    """Linha do relatório de cobertura: um módulo para um colaborador."""
    collaborator_id: str
    collaborator_name: str
    module_id: str
    module_code: str
    module_description: str
    current_level: Optional[SkillLevel] = None
    target_level: Optional[SkillLevel] = None
    gap: Optional[int] = None
