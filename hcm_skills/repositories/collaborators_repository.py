from datetime import datetime
from typing import Optional, Tuple, Union

from sqlalchemy.orm import Session

from hcm_skills.errors import PersistenceError
from hcm_skills.models import CareerPlan, CollaboratorProfile, ManagerAssessment, SkillClaim, User
from hcm_skills.repositories.base import BaseRepository, new_id, now_expression
from hcm_skills.repositories.mappers import (
    format_iso,
    map_assessment,
    map_career_plan,
    map_collaborator,
    map_collaborator_with_user,
    map_date,
    map_skill_claim,
    stringify_json,
)
from hcm_skills.schemas import (
    CollaboratorDetail,
    CollaboratorFilters,
    CollaboratorInput,
    CollaboratorProfileSchema,
    CollaboratorWithUser,
    PageParams,
    Paginated,
)


def _admission_date(value: Union[datetime, str]) -> str:
    if isinstance(value, datetime):
        return format_iso(value)
    return map_date(value)


class CollaboratorsRepository(BaseRepository[CollaboratorProfile]):
    """
    Repositório para operações com perfis de colaboradores.

    Remover um perfil apaga em cascata (no banco) autoavaliações, avaliações e
    planos, mas não o usuário vinculado. Para isso use
    ``CollaboratorAccessService.delete_collaborator_and_access``.
    """

    def __init__(self, db: Session):
        super().__init__(CollaboratorProfile, db)

    def _with_user_query(self):
        return self.db.query(CollaboratorProfile, User).outerjoin(
            User, User.id == CollaboratorProfile.user_id
        )

    @staticmethod
    def _map_row(row: Tuple[CollaboratorProfile, Optional[User]]) -> CollaboratorWithUser:
        profile, user = row
        return map_collaborator_with_user(profile, user)

    def create(self, data: CollaboratorInput) -> CollaboratorWithUser:
        """
        Cria um novo perfil de colaborador.

        Raises:
            PersistenceError: Se o registro não for encontrado após a escrita
        """
        collaborator_id = new_id()
        db_obj = CollaboratorProfile(
            id=collaborator_id,
            user_id=data.user_id,
            full_name=data.full_name,
            admission_date=_admission_date(data.admission_date),
            activities=stringify_json(data.activities or []),
            notes=data.notes,
        )
        self.db.add(db_obj)
        self._commit()

        collaborator = self.find_with_user_by_id(collaborator_id)
        if collaborator is None:
            raise PersistenceError("Failed to create collaborator profile.")
        return collaborator

    def update(self, id: str, data: CollaboratorInput) -> Optional[CollaboratorWithUser]:
        """
        Substitui os dados do perfil (inclusive o vínculo com usuário).

        Returns:
            Colaborador atualizado ou None se não encontrado
        """
        db_obj = self.get(id)
        if not db_obj:
            return None

        db_obj.user_id = data.user_id
        db_obj.full_name = data.full_name
        db_obj.admission_date = _admission_date(data.admission_date)
        db_obj.activities = stringify_json(data.activities or [])
        db_obj.notes = data.notes
        db_obj.updated_at = now_expression()
        self._commit()

        return self.find_with_user_by_id(id)

    def find_with_user_by_id(self, id: str) -> Optional[CollaboratorWithUser]:
        row = self._with_user_query().filter(CollaboratorProfile.id == id).first()
        return self._map_row(row) if row else None

    def find_by_user_id(self, user_id: str) -> Optional[CollaboratorProfileSchema]:
        db_obj = self.db.query(CollaboratorProfile).filter(CollaboratorProfile.user_id == user_id).first()
        return map_collaborator(db_obj) if db_obj else None

    def find_detail(self, id: str) -> Optional[CollaboratorDetail]:
        """
        Obtém o colaborador com autoavaliações, avaliações e planos (mais recentes primeiro).

        Args:
            id: ID do colaborador

        Returns:
            Detalhe do colaborador ou None se não encontrado
        """
        collaborator = self.find_with_user_by_id(id)
        if collaborator is None:
            return None

        claims = self.db.query(SkillClaim).filter(SkillClaim.collaborator_id == id).all()
        assessments = self.db.query(ManagerAssessment).filter(ManagerAssessment.collaborator_id == id).all()
        plans = (
            self.db.query(CareerPlan)
            .filter(CareerPlan.collaborator_id == id)
            .order_by(CareerPlan.created_at.desc())
            .all()
        )

        return CollaboratorDetail(
            **collaborator.model_dump(),
            skill_claims=[map_skill_claim(row) for row in claims],
            assessments=[map_assessment(row) for row in assessments],
            career_plans=[map_career_plan(row) for row in plans],
        )

    def list(
        self,
        params: PageParams,
        filters: Optional[CollaboratorFilters] = None,
    ) -> Paginated[CollaboratorWithUser]:
        """
        Lista colaboradores paginados, ordenados pelo nome.

        O filtro por atividade compara com cada item da lista de atividades
        (gravada como JSON), por isso é aplicado em memória antes da paginação.

        Args:
            params: Página e itens por página
            filters: Trecho do nome e atividade exata

        Returns:
            Página de colaboradores com o usuário vinculado
        """
        query = self._with_user_query()

        name = ((filters.name if filters else None) or "").strip()
        if name:
            query = query.filter(CollaboratorProfile.full_name.icontains(name, autoescape=True))
        query = query.order_by(CollaboratorProfile.full_name.asc())

        activity = filters.activity if filters else None
        if not activity:
            return self._paginate(query, params, self._map_row)

        matching = [
            collaborator
            for collaborator in (self._map_row(row) for row in query.all())
            if activity in collaborator.activities
        ]
        return self._page_of(matching, params)
