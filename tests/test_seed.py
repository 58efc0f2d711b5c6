from hcm_skills.config import Settings
from hcm_skills.models.enums import Role
from hcm_skills.repositories import ModulesRepository, UsersRepository
from hcm_skills.services.auth_service import verify_password
from hcm_skills.services.seed_service import DEFAULT_MODULES, seed_default_data


def _settings():
    return Settings(SEED_ADMIN_EMAIL="Admin@HCM.local", SEED_ADMIN_PASSWORD="admin123")


def test_seed_creates_admin_and_default_modules(db_session):
    result = seed_default_data(db_session, _settings())

    admin = UsersRepository(db_session).find_by_email("admin@hcm.local")
    assert result == {"admin_email": "admin@hcm.local", "admin_password": "admin123"}
    assert admin.role == Role.MASTER
    assert admin.must_change_password is False
    assert verify_password("admin123", admin.password_hash)

    codes = [module.code for module in ModulesRepository(db_session).list_all()]
    assert codes == sorted(module["code"] for module in DEFAULT_MODULES)


def test_seed_is_idempotent(db_session):
    seed_default_data(db_session, _settings())
    seed_default_data(db_session, _settings())

    assert UsersRepository(db_session).count() == 1
    assert ModulesRepository(db_session).count() == len(DEFAULT_MODULES)
