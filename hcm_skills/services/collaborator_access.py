"""
Cadastro de colaboradores com criação opcional de acesso ao sistema.

Quando o cadastro pede ``create_access``, um usuário COLABORADOR é criado com
senha temporária e troca obrigatória no primeiro login. As credenciais são
devolvidas uma única vez ao chamador e nunca gravadas em texto puro.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from hcm_skills.db import transaction
from hcm_skills.errors import ConflictError, ErrorCode, PersistenceError, ValidationError
from hcm_skills.models.enums import Role
from hcm_skills.repositories import CollaboratorsRepository, UsersRepository
from hcm_skills.schemas import (
    AccessCredentials,
    CollaboratorPayload,
    CollaboratorProfileSchema,
    CollaboratorWithUser,
    UserCreate,
    UserUpdate,
)
from hcm_skills.services.auth_service import hash_password
from hcm_skills.utils.password import generate_temporary_password

logger = logging.getLogger("uvicorn")


class CollaboratorAccessService:
    """Operações que envolvem o perfil do colaborador e o usuário vinculado."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UsersRepository(db)
        self.collaborators = CollaboratorsRepository(db)

    def _ensure_user(
        self,
        payload: CollaboratorPayload,
        existing_user_id: Optional[str],
    ) -> Tuple[Optional[str], Optional[AccessCredentials]]:
        """
        Decide o usuário vinculado ao perfil, criando o acesso se solicitado.

        Um vínculo existente é sempre reaproveitado. Sem ``create_access``
        vale o ``user_id`` informado no payload.

        Raises:
            ValidationError: ACCESS_EMAIL_REQUIRED se não houver email
            ConflictError: ACCESS_EMAIL_IN_USE se o email já pertencer a um usuário
        """
        if existing_user_id:
            return existing_user_id, None

        if not payload.create_access:
            return payload.user_id, None

        email = (payload.access_email or "").strip().lower()
        if not email:
            raise ValidationError(ErrorCode.ACCESS_EMAIL_REQUIRED)

        if self.users.find_by_email(email) is not None:
            raise ConflictError(ErrorCode.ACCESS_EMAIL_IN_USE, email)

        temporary_password = generate_temporary_password()
        user = self.users.create(
            UserCreate(
                email=email,
                password_hash=hash_password(temporary_password),
                role=Role.COLABORADOR,
                must_change_password=True,
            )
        )
        logger.info("Acesso criado para %s", user.email)
        return user.id, AccessCredentials(email=user.email, temporary_password=temporary_password)

    def create_collaborator(
        self,
        payload: CollaboratorPayload,
    ) -> Tuple[CollaboratorWithUser, Optional[AccessCredentials]]:
        """
        Cria o perfil e, se solicitado, o usuário, na mesma transação.

        Returns:
            Tuple com o colaborador criado e as credenciais (ou None)
        """
        with transaction(self.db):
            user_id, credentials = self._ensure_user(payload, payload.user_id)
            collaborator = self.collaborators.create(payload.to_input(user_id))
        return collaborator, credentials

    def update_collaborator(
        self,
        collaborator_id: str,
        payload: CollaboratorPayload,
    ) -> Optional[Tuple[CollaboratorWithUser, Optional[AccessCredentials]]]:
        """
        Atualiza o perfil e, se solicitado, cria o acesso, na mesma transação.

        Returns:
            Tuple com o colaborador e as credenciais, ou None se o perfil não existir

        Raises:
            ValidationError: COLLABORATOR_ALREADY_LINKED se o perfil já tiver usuário
                e ``create_access`` for pedido
        """
        existing = self.collaborators.find_with_user_by_id(collaborator_id)
        if existing is None:
            return None

        if existing.user_id and payload.create_access:
            raise ValidationError(ErrorCode.COLLABORATOR_ALREADY_LINKED)

        with transaction(self.db):
            user_id, credentials = self._ensure_user(payload, existing.user_id)
            collaborator = self.collaborators.update(collaborator_id, payload.to_input(user_id))
            if collaborator is None:
                raise PersistenceError("Failed to update collaborator profile.")
        return collaborator, credentials

    def reset_access(self, collaborator_id: str) -> Optional[AccessCredentials]:
        """
        Gera nova senha temporária para o usuário vinculado.

        Returns:
            Novas credenciais, ou None se o colaborador não existir

        Raises:
            ValidationError: COLLABORATOR_WITHOUT_ACCESS se não houver usuário vinculado
        """
        collaborator = self.collaborators.find_with_user_by_id(collaborator_id)
        if collaborator is None:
            return None
        if collaborator.user is None:
            raise ValidationError(ErrorCode.COLLABORATOR_WITHOUT_ACCESS)

        temporary_password = generate_temporary_password()
        with transaction(self.db):
            user = self.users.update(
                collaborator.user.id,
                UserUpdate(password_hash=hash_password(temporary_password), must_change_password=True),
            )
            if user is None:
                raise PersistenceError("Failed to reset collaborator access.")

        logger.info("Acesso redefinido para %s", user.email)
        return AccessCredentials(email=user.email, temporary_password=temporary_password)

    def delete_collaborator_and_access(self, collaborator_id: str) -> bool:
        """
        Remove o perfil e o usuário vinculado (se houver) em uma única transação.

        Returns:
            False se o perfil não existir
        """
        with transaction(self.db):
            collaborator = self.collaborators.find_with_user_by_id(collaborator_id)
            if collaborator is None:
                return False

            self.collaborators.delete(collaborator_id)
            if collaborator.user_id:
                self.users.delete(collaborator.user_id)

        logger.info("Colaborador %s removido", collaborator_id)
        return True

    def require_profile(self, user_id: str) -> CollaboratorProfileSchema:
        """
        Perfil de colaborador do usuário autenticado.

        Raises:
            ValidationError: COLLABORATOR_PROFILE_REQUIRED se o usuário não tiver perfil
        """
        profile = self.collaborators.find_by_user_id(user_id)
        if profile is None:
            raise ValidationError(ErrorCode.COLLABORATOR_PROFILE_REQUIRED)
        return profile
