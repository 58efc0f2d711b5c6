from typing import List, Optional

from pydantic import Field

from hcm_skills.schemas.base import BaseSchema


class ModuleRoutineSchema(BaseSchema):
    """Esquema para representação de módulos."""
    id: str
    code: str
    description: str
    observation: Optional[str] = None
    created_at: str
    updated_at: str


class ModuleCreate(BaseSchema):
    """Esquema para criação de módulos."""
    code: str = Field(min_length=2)
    description: str = Field(min_length=3)
    observation: Optional[str] = None


class ModuleUpdate(BaseSchema):
    """Esquema para atualização parcial de módulos."""
    code: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = Field(default=None, min_length=3)
    observation: Optional[str] = None


class ModuleFilters(BaseSchema):
    """
    Filtros da listagem de módulos.

    Com vários códigos a busca é exata; com um único código, por trecho.
    """
    codes: List[str] = []
    description: Optional[str] = None
