from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from hcm_skills.errors import PersistenceError
from hcm_skills.models import ManagerAssessment
from hcm_skills.repositories.base import BaseRepository, new_id, now_expression
from hcm_skills.repositories.mappers import map_assessment, map_assessment_with_module
from hcm_skills.schemas import AssessmentInput, ManagerAssessmentSchema, ManagerAssessmentWithModule


class AssessmentsRepository(BaseRepository[ManagerAssessment]):
    """
    Repositório para avaliações do gestor.

    Assim como as autoavaliações, há no máximo uma avaliação por
    (colaborador, módulo).
    """

    def __init__(self, db: Session):
        super().__init__(ManagerAssessment, db)

    def find_with_module_by_id(self, id: str) -> Optional[ManagerAssessmentWithModule]:
        db_obj = (
            self.db.query(ManagerAssessment)
            .options(joinedload(ManagerAssessment.module))
            .filter(ManagerAssessment.id == id)
            .first()
        )
        return map_assessment_with_module(db_obj) if db_obj else None

    def upsert(self, data: AssessmentInput) -> ManagerAssessmentWithModule:
        """
        Cria ou atualiza a avaliação do par (colaborador, módulo).

        Raises:
            PersistenceError: Se o registro não for encontrado após a escrita
        """
        existing = (
            self.db.query(ManagerAssessment)
            .filter(
                ManagerAssessment.collaborator_id == data.collaborator_id,
                ManagerAssessment.module_id == data.module_id,
            )
            .first()
        )

        if existing:
            assessment_id = existing.id
            existing.target_level = data.target_level.value
            existing.comment = data.comment
            existing.updated_at = now_expression()
        else:
            assessment_id = new_id()
            self.db.add(
                ManagerAssessment(
                    id=assessment_id,
                    collaborator_id=data.collaborator_id,
                    module_id=data.module_id,
                    target_level=data.target_level.value,
                    comment=data.comment,
                )
            )
        self._commit()

        assessment = self.find_with_module_by_id(assessment_id)
        if assessment is None:
            raise PersistenceError("Failed to save manager assessment.")
        return assessment

    def list(self, collaborator_id: Optional[str] = None) -> List[ManagerAssessmentWithModule]:
        """Lista avaliações com o módulo, opcionalmente de um único colaborador."""
        query = self.db.query(ManagerAssessment).options(joinedload(ManagerAssessment.module))
        if collaborator_id:
            query = query.filter(ManagerAssessment.collaborator_id == collaborator_id)
        return [map_assessment_with_module(row) for row in query.all()]

    def list_all(self) -> List[ManagerAssessmentSchema]:
        return [map_assessment(row) for row in self.db.query(ManagerAssessment).all()]
