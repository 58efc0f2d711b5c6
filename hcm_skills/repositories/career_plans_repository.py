from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy.orm import Session, joinedload

from hcm_skills.errors import PersistenceError
from hcm_skills.models import CareerPlan, CareerPlanModule, ModuleRoutine
from hcm_skills.repositories.base import BaseRepository, new_id, now_expression
from hcm_skills.repositories.mappers import format_iso, map_career_plan, map_date, map_plan_module
from hcm_skills.schemas import CareerPlanCreate, CareerPlanUpdate, CareerPlanWithModules


def _due_date(value: Union[datetime, str, None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return format_iso(value)
    return map_date(value)


class CareerPlansRepository(BaseRepository[CareerPlan]):
    """
    Repositório para planos de carreira e seus módulos.

    Gravações que envolvem o plano e os vínculos com módulos acontecem em uma
    única transação: os vínculos são sempre substituídos por inteiro.
    """

    def __init__(self, db: Session):
        super().__init__(CareerPlan, db)

    def _replace_modules(self, plan_id: str, module_ids: List[str]) -> None:
        self.db.query(CareerPlanModule).filter(CareerPlanModule.career_plan_id == plan_id).delete()
        for module_id in module_ids:
            self.db.add(CareerPlanModule(id=new_id(), career_plan_id=plan_id, module_id=module_id))
        self.db.flush()

    def _plan_modules(self, plan_id: str):
        rows = (
            self.db.query(CareerPlanModule)
            .join(ModuleRoutine, ModuleRoutine.id == CareerPlanModule.module_id)
            .options(joinedload(CareerPlanModule.module))
            .filter(CareerPlanModule.career_plan_id == plan_id)
            .order_by(ModuleRoutine.code.asc())
            .all()
        )
        return [map_plan_module(row) for row in rows]

    def _with_modules(self, plan: CareerPlan) -> CareerPlanWithModules:
        return CareerPlanWithModules(
            **map_career_plan(plan).model_dump(),
            modules=self._plan_modules(plan.id),
        )

    def create(self, data: CareerPlanCreate) -> CareerPlanWithModules:
        """
        Cria o plano e os vínculos com módulos em uma única transação.

        Raises:
            PersistenceError: Se o registro não for encontrado após a escrita
            IntegrityError: Se um módulo ou o colaborador não existir
        """
        plan_id = new_id()
        with self._unit_of_work():
            self.db.add(
                CareerPlan(
                    id=plan_id,
                    collaborator_id=data.collaborator_id,
                    objectives=data.objectives,
                    due_date=_due_date(data.due_date),
                    notes=data.notes,
                )
            )
            self.db.flush()
            if data.module_ids:
                self._replace_modules(plan_id, data.module_ids)

        plan = self.find_by_id(plan_id)
        if plan is None:
            raise PersistenceError("Failed to create career plan.")
        return plan

    def update(self, id: str, data: CareerPlanUpdate) -> Optional[CareerPlanWithModules]:
        """
        Atualização parcial do plano.

        Campos omitidos ficam inalterados e ``None`` limpa o valor. Se
        ``module_ids`` for informado, os vínculos são apagados e recriados na
        mesma transação das alterações escalares.

        Returns:
            Plano atualizado ou None se não encontrado
        """
        changes = data.model_dump(exclude_unset=True)
        module_ids = changes.pop("module_ids", None)
        update_modules = module_ids is not None

        if not changes and not update_modules:
            return self.find_by_id(id)

        with self._unit_of_work():
            db_obj = self.get(id)
            if not db_obj:
                return None

            if changes:
                if changes.get("collaborator_id") is not None:
                    db_obj.collaborator_id = changes["collaborator_id"]
                if changes.get("objectives") is not None:
                    db_obj.objectives = changes["objectives"]
                if "due_date" in changes:
                    db_obj.due_date = _due_date(changes["due_date"])
                if "notes" in changes:
                    db_obj.notes = changes["notes"]
                db_obj.updated_at = now_expression()
                self.db.flush()

            if update_modules:
                self._replace_modules(id, module_ids)

        return self.find_by_id(id)

    def delete(self, id: str) -> bool:
        """Remove os vínculos e o plano na mesma transação."""
        with self._unit_of_work():
            db_obj = self.get(id)
            if not db_obj:
                return False
            self.db.query(CareerPlanModule).filter(CareerPlanModule.career_plan_id == id).delete()
            self.db.delete(db_obj)
            self.db.flush()
        return True

    def find_by_id(self, id: str) -> Optional[CareerPlanWithModules]:
        db_obj = self.get(id)
        return self._with_modules(db_obj) if db_obj else None

    def list(self, collaborator_id: Optional[str] = None) -> List[CareerPlanWithModules]:
        """Lista planos, mais recentes primeiro, opcionalmente de um único colaborador."""
        query = self.db.query(CareerPlan)
        if collaborator_id:
            query = query.filter(CareerPlan.collaborator_id == collaborator_id)
        return [self._with_modules(row) for row in query.order_by(CareerPlan.created_at.desc()).all()]
