import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Esquema base para todos os modelos Pydantic (camelCase no JSON)."""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class PageParams(BaseSchema):
    """Parâmetros de paginação."""
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class PageMeta(BaseSchema):
    """Metadados de uma página de resultados."""
    page: int
    per_page: int
    total: int
    total_pages: int


class Paginated(BaseSchema, Generic[T]):
    """Página de resultados com os metadados de paginação."""
    data: List[T]
    meta: PageMeta

    @classmethod
    def build(cls, data: List[T], total: int, params: PageParams) -> "Paginated[T]":
        return cls(
            data=data,
            meta=PageMeta(
                page=params.page,
                per_page=params.per_page,
                total=total,
                total_pages=math.ceil(total / params.per_page),
            ),
        )
