"""Dados iniciais: usuário administrador e módulos padrão."""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from hcm_skills.config import Settings, get_settings
from hcm_skills.models.enums import Role
from hcm_skills.repositories import ModulesRepository, UsersRepository
from hcm_skills.schemas import ModuleCreate, UserCreate, UserRecord
from hcm_skills.services.auth_service import hash_password

logger = logging.getLogger("uvicorn")

DEFAULT_MODULES: List[Dict[str, str]] = [
    {
        "code": "FOLHA_CALCULOS",
        "description": "Folha de Pagamento - Calculos",
        "observation": "Folha de Pagamento",
    },
    {
        "code": "PONTO_CONTROLE",
        "description": "Controle de Ponto",
        "observation": "Jornada e Frequencia",
    },
    {
        "code": "TREINAMENTO_GESTAO",
        "description": "Gestao de Treinamentos",
        "observation": "Desenvolvimento",
    },
]


def seed_admin(db: Session, settings: Settings) -> UserRecord:
    """Cria o administrador MASTER se o email ainda não estiver cadastrado."""
    users = UsersRepository(db)
    existing = users.find_by_email(settings.seed_admin_email)
    if existing is not None:
        return existing

    admin = users.create(
        UserCreate(
            email=settings.seed_admin_email,
            password_hash=hash_password(settings.seed_admin_password),
            role=Role.MASTER,
            must_change_password=False,
        )
    )
    logger.info("Usuário administrador criado: %s", admin.email)
    return admin


def seed_modules(db: Session) -> None:
    modules = ModulesRepository(db)
    for module in DEFAULT_MODULES:
        modules.upsert_by_code(ModuleCreate(**module))


def seed_default_data(db: Session, settings: Optional[Settings] = None) -> Dict[str, str]:
    """
    Garante o administrador e os módulos padrão. Pode ser executado várias vezes.

    Returns:
        Email e senha configurados para o administrador
    """
    settings = settings or get_settings()
    admin = seed_admin(db, settings)
    seed_modules(db)
    return {"admin_email": admin.email, "admin_password": settings.seed_admin_password}
