from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from hcm_skills.errors import PersistenceError
from hcm_skills.models import ModuleRoutine
from hcm_skills.repositories.base import BaseRepository, new_id, now_expression
from hcm_skills.repositories.mappers import map_module
from hcm_skills.schemas import (
    ModuleCreate,
    ModuleFilters,
    ModuleRoutineSchema,
    ModuleUpdate,
    PageParams,
    Paginated,
)


def normalize_codes(codes: List[str]) -> List[str]:
    """Separa por vírgula, remove vazios e converte para maiúsculas."""
    normalized = []
    for raw in codes:
        for entry in raw.split(","):
            entry = entry.strip()
            if entry:
                normalized.append(entry.upper())
    return normalized


class ModulesRepository(BaseRepository[ModuleRoutine]):
    """Repositório para operações com módulos/rotinas."""

    def __init__(self, db: Session):
        super().__init__(ModuleRoutine, db)

    def create(self, data: ModuleCreate) -> ModuleRoutineSchema:
        """
        Cria um novo módulo com o código em maiúsculas.

        Raises:
            PersistenceError: Se o registro não for encontrado após a escrita
            IntegrityError: Se o código já existir
        """
        module_id = new_id()
        db_obj = ModuleRoutine(
            id=module_id,
            code=data.code.strip().upper(),
            description=data.description,
            observation=data.observation,
        )
        self.db.add(db_obj)
        self._commit()

        module = self.find_by_id(module_id)
        if module is None:
            raise PersistenceError("Failed to create module.")
        return module

    def update(self, id: str, data: ModuleUpdate) -> Optional[ModuleRoutineSchema]:
        """
        Atualiza os campos informados; ``observation=None`` limpa a observação.

        Returns:
            Módulo atualizado ou None se não encontrado
        """
        db_obj = self.get(id)
        if not db_obj:
            return None

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return map_module(db_obj)

        if changes.get("code") is not None:
            db_obj.code = changes["code"].strip().upper()
        if changes.get("description") is not None:
            db_obj.description = changes["description"]
        if "observation" in changes:
            db_obj.observation = changes["observation"]
        db_obj.updated_at = now_expression()
        self._commit()

        return self.find_by_id(id)

    def find_by_id(self, id: str) -> Optional[ModuleRoutineSchema]:
        db_obj = self.get(id)
        return map_module(db_obj) if db_obj else None

    def find_by_code(self, code: str) -> Optional[ModuleRoutineSchema]:
        """Busca um módulo pelo código, sem diferenciar maiúsculas de minúsculas."""
        db_obj = (
            self.db.query(ModuleRoutine)
            .filter(func.upper(ModuleRoutine.code) == code.strip().upper())
            .first()
        )
        return map_module(db_obj) if db_obj else None

    def list(self, params: PageParams, filters: Optional[ModuleFilters] = None) -> Paginated[ModuleRoutineSchema]:
        """
        Lista módulos paginados, ordenados por código.

        Args:
            params: Página e itens por página
            filters: Códigos (vários = busca exata, um = por trecho) e trecho da descrição

        Returns:
            Página de módulos
        """
        query = self.db.query(ModuleRoutine)

        if filters is not None:
            codes = normalize_codes(filters.codes)
            if len(codes) > 1:
                query = query.filter(ModuleRoutine.code.in_(codes))
            elif codes:
                query = query.filter(ModuleRoutine.code.icontains(codes[0], autoescape=True))

            description = (filters.description or "").strip()
            if description:
                query = query.filter(ModuleRoutine.description.icontains(description, autoescape=True))

        return self._paginate(query.order_by(ModuleRoutine.code.asc()), params, map_module)

    def list_all(self) -> List[ModuleRoutineSchema]:
        rows = self.db.query(ModuleRoutine).order_by(ModuleRoutine.code.asc()).all()
        return [map_module(row) for row in rows]

    def upsert_by_code(self, data: ModuleCreate) -> ModuleRoutineSchema:
        """Atualiza o módulo com o mesmo código (normalizado) ou cria um novo."""
        existing = self.find_by_code(data.code)
        if existing is None:
            return self.create(data)

        updated = self.update(
            existing.id,
            ModuleUpdate(code=data.code, description=data.description, observation=data.observation),
        )
        if updated is None:
            raise PersistenceError("Failed to update module.")
        return updated
