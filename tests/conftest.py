import os

# Configuração de teste antes de importar a aplicação
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from hcm_skills.db import Base, create_db_engine, get_db
from hcm_skills import models  # noqa: F401
from hcm_skills.models.enums import Role
from hcm_skills.repositories import CollaboratorsRepository, ModulesRepository, UsersRepository
from hcm_skills.schemas import CollaboratorInput, ModuleCreate, UserCreate
from hcm_skills.services.auth_service import create_access_token, hash_password
from sqlalchemy.orm import sessionmaker

MASTER_PASSWORD = "master123"
COLABORADOR_PASSWORD = "colab1234"


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    from hcm_skills.main import app

    # Rotas e testes compartilham a mesma sessão (o banco em memória tem uma única conexão)
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def master_user(db_session):
    return UsersRepository(db_session).create(
        UserCreate(
            email="gestor@example.com",
            password_hash=hash_password(MASTER_PASSWORD),
            role=Role.MASTER,
        )
    )


@pytest.fixture
def colaborador_user(db_session):
    return UsersRepository(db_session).create(
        UserCreate(
            email="ana@example.com",
            password_hash=hash_password(COLABORADOR_PASSWORD),
            role=Role.COLABORADOR,
        )
    )


@pytest.fixture
def collaborator(db_session, colaborador_user):
    """Perfil vinculado ao usuário COLABORADOR."""
    return CollaboratorsRepository(db_session).create(
        CollaboratorInput(
            full_name="Ana Silva",
            admission_date="2024-01-15T00:00:00.000Z",
            activities=["Folha", "Ponto"],
            user_id=colaborador_user.id,
        )
    )


@pytest.fixture
def module(db_session):
    return ModulesRepository(db_session).create(
        ModuleCreate(code="folha_calculos", description="Folha de Pagamento", observation="Folha")
    )


@pytest.fixture
def master_headers(master_user):
    return {"Authorization": f"Bearer {create_access_token(master_user)}"}


@pytest.fixture
def colaborador_headers(colaborador_user, collaborator):
    return {"Authorization": f"Bearer {create_access_token(colaborador_user)}"}
