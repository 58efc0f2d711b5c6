from typing import Optional

from sqlalchemy.orm import Session

from hcm_skills.errors import PersistenceError
from hcm_skills.models import User
from hcm_skills.repositories.base import BaseRepository, new_id, now_expression
from hcm_skills.repositories.mappers import map_user, map_user_summary
from hcm_skills.schemas import UserCreate, UserRecord, UserSummary, UserUpdate


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UsersRepository(BaseRepository[User]):
    """
    Repositório para operações com usuários.

    O email é sempre gravado e buscado normalizado (sem espaços, minúsculo).
    """

    def __init__(self, db: Session):
        super().__init__(User, db)

    def create(self, data: UserCreate) -> UserRecord:
        """
        Cria um novo usuário.

        Args:
            data: Email, hash da senha, papel e a flag de troca obrigatória

        Returns:
            Usuário criado, relido do banco

        Raises:
            PersistenceError: Se o registro não for encontrado após a escrita
            IntegrityError: Se o email já estiver cadastrado
        """
        user_id = new_id()
        db_obj = User(
            id=user_id,
            email=normalize_email(data.email),
            password_hash=data.password_hash,
            role=data.role.value,
            must_change_password=1 if data.must_change_password else 0,
        )
        self.db.add(db_obj)
        self._commit()

        user = self.find_by_id(user_id)
        if user is None:
            raise PersistenceError("Failed to create user.")
        return user

    def update(self, id: str, data: UserUpdate) -> Optional[UserRecord]:
        """
        Atualiza apenas os campos informados.

        Returns:
            Usuário atualizado ou None se não encontrado
        """
        db_obj = self.get(id)
        if not db_obj:
            return None

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return map_user(db_obj)

        if "email" in changes and changes["email"] is not None:
            db_obj.email = normalize_email(changes["email"])
        if "password_hash" in changes and changes["password_hash"] is not None:
            db_obj.password_hash = changes["password_hash"]
        if "role" in changes and changes["role"] is not None:
            db_obj.role = changes["role"].value
        if "must_change_password" in changes and changes["must_change_password"] is not None:
            db_obj.must_change_password = 1 if changes["must_change_password"] else 0
        db_obj.updated_at = now_expression()
        self._commit()

        return self.find_by_id(id)

    def find_by_id(self, id: str) -> Optional[UserRecord]:
        db_obj = self.get(id)
        return map_user(db_obj) if db_obj else None

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """
        Obtém um usuário pelo email (comparação normalizada).

        Args:
            email: Email do usuário

        Returns:
            Usuário ou None se não encontrado
        """
        db_obj = self.db.query(User).filter(User.email == normalize_email(email)).first()
        return map_user(db_obj) if db_obj else None

    def find_summary_by_id(self, id: str) -> Optional[UserSummary]:
        db_obj = self.get(id)
        return map_user_summary(db_obj) if db_obj else None
