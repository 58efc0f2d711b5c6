from datetime import datetime
from typing import List, Optional

from pydantic import Field

from hcm_skills.schemas.base import BaseSchema
from hcm_skills.schemas.modules import ModuleRoutineSchema


class CareerPlanSchema(BaseSchema):
    """Plano de carreira sem os módulos vinculados."""
    id: str
    collaborator_id: str
    objectives: str
    due_date: Optional[str] = None
    notes: Optional[str] = None
    created_at: str
    updated_at: str


class CareerPlanModuleSchema(BaseSchema):
    id: str
    career_plan_id: str
    module_id: str
    created_at: str


class CareerPlanModuleWithModule(CareerPlanModuleSchema):
    module: ModuleRoutineSchema


class CareerPlanWithModules(CareerPlanSchema):
    """Plano de carreira com os módulos ordenados por código."""
    modules: List[CareerPlanModuleWithModule] = []


class CareerPlanCreate(BaseSchema):
    """Esquema para criação de planos de carreira."""
    collaborator_id: str
    objectives: str = Field(min_length=3)
    due_date: Optional[datetime] = None
    notes: Optional[str] = None
    module_ids: List[str] = []


class CareerPlanUpdate(BaseSchema):
    """
    Atualização parcial de planos de carreira.

    Campo omitido fica inalterado; ``None`` explícito limpa o valor. Quando
    ``module_ids`` é informado a lista de módulos é substituída por inteiro.
    """
    collaborator_id: Optional[str] = None
    objectives: Optional[str] = Field(default=None, min_length=3)
    due_date: Optional[datetime] = None
    notes: Optional[str] = None
    module_ids: Optional[List[str]] = None
