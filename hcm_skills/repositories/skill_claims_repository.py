from typing import List, Optional, Union

from sqlalchemy.orm import Session, joinedload

from hcm_skills.errors import PersistenceError
from hcm_skills.models import SkillClaim
from hcm_skills.repositories.base import BaseRepository, new_id, now_expression
from hcm_skills.repositories.mappers import map_skill_claim, map_skill_claim_with_module
from hcm_skills.schemas import SkillClaimInput, SkillClaimSchema, SkillClaimUpdate, SkillClaimWithModule


class SkillClaimsRepository(BaseRepository[SkillClaim]):
    """
    Repositório para autoavaliações.

    Existe no máximo uma autoavaliação por (colaborador, módulo); a escrita é
    feita por upsert sobre esse par.
    """

    def __init__(self, db: Session):
        super().__init__(SkillClaim, db)

    def find_by_id(self, id: str) -> Optional[SkillClaimSchema]:
        db_obj = self.get(id)
        return map_skill_claim(db_obj) if db_obj else None

    def find_with_module_by_id(self, id: str) -> Optional[SkillClaimWithModule]:
        db_obj = (
            self.db.query(SkillClaim)
            .options(joinedload(SkillClaim.module))
            .filter(SkillClaim.id == id)
            .first()
        )
        return map_skill_claim_with_module(db_obj) if db_obj else None

    def upsert(self, data: SkillClaimInput) -> SkillClaimWithModule:
        """
        Cria ou atualiza a autoavaliação do par (colaborador, módulo).

        Args:
            data: Colaborador, módulo, nível atual e evidência

        Returns:
            Autoavaliação após a escrita, com o módulo

        Raises:
            PersistenceError: Se o registro não for encontrado após a escrita
        """
        existing = (
            self.db.query(SkillClaim)
            .filter(
                SkillClaim.collaborator_id == data.collaborator_id,
                SkillClaim.module_id == data.module_id,
            )
            .first()
        )

        if existing:
            claim_id = existing.id
            existing.current_level = data.current_level.value
            existing.evidence = data.evidence
            existing.updated_at = now_expression()
        else:
            claim_id = new_id()
            self.db.add(
                SkillClaim(
                    id=claim_id,
                    collaborator_id=data.collaborator_id,
                    module_id=data.module_id,
                    current_level=data.current_level.value,
                    evidence=data.evidence,
                )
            )
        self._commit()

        claim = self.find_with_module_by_id(claim_id)
        if claim is None:
            raise PersistenceError("Failed to save skill claim.")
        return claim

    def update(self, id: str, data: SkillClaimUpdate) -> Optional[SkillClaimWithModule]:
        """
        Atualização parcial: só os campos informados são alterados.

        Returns:
            Autoavaliação atualizada ou None se não encontrada
        """
        db_obj = self.get(id)
        if not db_obj:
            return None

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return self.find_with_module_by_id(id)

        if changes.get("current_level") is not None:
            db_obj.current_level = changes["current_level"].value
        if "evidence" in changes:
            db_obj.evidence = changes["evidence"]
        db_obj.updated_at = now_expression()
        self._commit()

        return self.find_with_module_by_id(id)

    def list(
        self,
        collaborator_id: Optional[str] = None,
        include_module: bool = False,
    ) -> List[Union[SkillClaimSchema, SkillClaimWithModule]]:
        """
        Lista autoavaliações, opcionalmente de um único colaborador.

        Args:
            collaborator_id: Restringe ao colaborador informado
            include_module: Inclui o módulo de cada autoavaliação

        Returns:
            Lista de autoavaliações
        """
        query = self.db.query(SkillClaim)
        if collaborator_id:
            query = query.filter(SkillClaim.collaborator_id == collaborator_id)

        if include_module:
            rows = query.options(joinedload(SkillClaim.module)).all()
            return [map_skill_claim_with_module(row) for row in rows]
        return [map_skill_claim(row) for row in query.all()]
