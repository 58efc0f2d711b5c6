import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from hcm_skills.config import Settings, get_settings
from hcm_skills.errors import ErrorCode, ValidationError
from hcm_skills.repositories import UsersRepository
from hcm_skills.schemas import UserRecord, UserUpdate

logger = logging.getLogger("uvicorn")

# Custo do bcrypt, compatível com os hashes já gravados
BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Gera o hash bcrypt de uma senha."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Compara a senha com o hash gravado; hash malformado conta como senha incorreta."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user: UserRecord, settings: Optional[Settings] = None) -> str:
    """Token JWT com ``sub`` = id do usuário e as claims ``role`` e ``email``."""
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expires_minutes)
    to_encode = {
        "sub": user.id,
        "role": user.role.value,
        "email": user.email,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Optional[Dict[str, Any]]:
    """Payload do token, ou None se a assinatura, o formato ou a validade falharem."""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


class AuthService:
    """
    Serviço para autenticação de usuários.

    Valida credenciais contra o hash bcrypt gravado e mantém a troca de senha
    obrigatória dos acessos criados com senha temporária.
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()
        self.users = UsersRepository(db)

    def authenticate(self, email: str, password: str) -> Tuple[bool, Optional[UserRecord]]:
        """
        Autentica um usuário por email e senha.

        Args:
            email: Email do usuário (normalizado antes da busca)
            password: Senha informada

        Returns:
            Tuple contendo status de autenticação (bool) e o usuário
        """
        user = self.users.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Falha na autenticação para %s", email)
            return False, None
        return True, user

    def issue_token(self, user: UserRecord) -> str:
        return create_access_token(user, self.settings)

    def change_password(self, user_id: str, current_password: str, new_password: str) -> bool:
        """
        Troca a senha do usuário e desliga a troca obrigatória.

        Returns:
            False se o usuário não existir

        Raises:
            ValidationError: Senha atual incorreta ou nova senha igual à atual
        """
        user = self.users.find_by_id(user_id)
        if user is None:
            return False

        if not verify_password(current_password, user.password_hash):
            raise ValidationError(ErrorCode.INVALID_CURRENT_PASSWORD)
        if current_password == new_password:
            raise ValidationError(ErrorCode.PASSWORD_UNCHANGED)

        self.users.update(
            user_id,
            UserUpdate(password_hash=hash_password(new_password), must_change_password=False),
        )
        logger.info("Senha alterada para o usuário %s", user.email)
        return True
