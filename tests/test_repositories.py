import pytest
from sqlalchemy.exc import IntegrityError

from hcm_skills.db import transaction
from hcm_skills.errors import PersistenceError
from hcm_skills.models import CareerPlanModule, ManagerAssessment, SkillClaim, User
from hcm_skills.models.enums import Role, SkillLevel
from hcm_skills.repositories import (
    AssessmentsRepository,
    CareerPlansRepository,
    CollaboratorsRepository,
    ModulesRepository,
    SkillClaimsRepository,
    UsersRepository,
)
from hcm_skills.repositories.modules_repository import normalize_codes
from hcm_skills.schemas import (
    AssessmentInput,
    CareerPlanCreate,
    CareerPlanUpdate,
    CollaboratorFilters,
    CollaboratorInput,
    ModuleCreate,
    ModuleFilters,
    ModuleUpdate,
    PageParams,
    SkillClaimInput,
    SkillClaimUpdate,
    UserCreate,
    UserUpdate,
)


def _claim(collaborator, module, level=SkillLevel.ATENDE, evidence="Fechamento mensal"):
    return SkillClaimInput(
        collaborator_id=collaborator.id,
        module_id=module.id,
        current_level=level,
        evidence=evidence,
    )


# Usuários

def test_create_user_normalizes_email(db_session):
    repo = UsersRepository(db_session)
    user = repo.create(UserCreate(email="  Joao@Example.COM ", password_hash="hash", role=Role.MASTER))

    assert user.email == "joao@example.com"
    assert user.must_change_password is False
    assert user.created_at.endswith("Z")
    assert repo.find_by_email("JOAO@example.com").id == user.id


def test_update_user_only_changes_given_fields(db_session, colaborador_user):
    repo = UsersRepository(db_session)
    updated = repo.update(colaborador_user.id, UserUpdate(must_change_password=True))

    assert updated.must_change_password is True
    assert updated.password_hash == colaborador_user.password_hash
    assert updated.role == Role.COLABORADOR
    assert repo.update("inexistente", UserUpdate(must_change_password=True)) is None


def test_duplicate_email_is_rejected_by_store(db_session, colaborador_user):
    with pytest.raises(IntegrityError):
        UsersRepository(db_session).create(UserCreate(email="ana@example.com", password_hash="hash"))
    # A sessão continua utilizável após o rollback
    assert UsersRepository(db_session).find_by_id(colaborador_user.id) is not None


def test_create_raises_persistence_error_when_read_back_fails(db_session, monkeypatch):
    repo = UsersRepository(db_session)
    monkeypatch.setattr(repo, "find_by_id", lambda id: None)

    with pytest.raises(PersistenceError) as exc_info:
        repo.create(UserCreate(email="novo@example.com", password_hash="hash"))
    assert exc_info.value.detail == "Failed to create user."


# Módulos

def test_module_code_is_stored_upper_case(db_session, module):
    assert module.code == "FOLHA_CALCULOS"
    assert ModulesRepository(db_session).find_by_code("folha_calculos").id == module.id


def test_module_update_can_clear_observation(db_session, module):
    repo = ModulesRepository(db_session)
    updated = repo.update(module.id, ModuleUpdate(description="Folha - Cálculos", observation=None))

    assert updated.description == "Folha - Cálculos"
    assert updated.observation is None
    assert updated.code == "FOLHA_CALCULOS"


def test_upsert_module_by_code(db_session, module):
    repo = ModulesRepository(db_session)
    updated = repo.upsert_by_code(ModuleCreate(code="Folha_Calculos", description="Nova descrição"))
    created = repo.upsert_by_code(ModuleCreate(code="ponto", description="Controle de Ponto"))

    assert updated.id == module.id
    assert updated.description == "Nova descrição"
    assert created.code == "PONTO"
    assert repo.count() == 2


def test_normalize_codes():
    assert normalize_codes(["a, b", " ", "c"]) == ["A", "B", "C"]


def test_list_modules_filters_and_pagination(db_session):
    repo = ModulesRepository(db_session)
    for code, description in [
        ("FOLHA_CALCULOS", "Folha de Pagamento"),
        ("FOLHA_FERIAS", "Férias"),
        ("PONTO_CONTROLE", "Controle de Ponto"),
    ]:
        repo.create(ModuleCreate(code=code, description=description))

    single = repo.list(PageParams(), ModuleFilters(codes=["folha"]))
    assert [m.code for m in single.data] == ["FOLHA_CALCULOS", "FOLHA_FERIAS"]

    exact = repo.list(PageParams(), ModuleFilters(codes=["folha_ferias,ponto_controle"]))
    assert [m.code for m in exact.data] == ["FOLHA_FERIAS", "PONTO_CONTROLE"]

    by_description = repo.list(PageParams(), ModuleFilters(description="CONTROLE"))
    assert [m.code for m in by_description.data] == ["PONTO_CONTROLE"]

    page = repo.list(PageParams(page=2, per_page=2))
    assert [m.code for m in page.data] == ["PONTO_CONTROLE"]
    assert page.meta.total == 3
    assert page.meta.total_pages == 2
    assert page.meta.page == 2


def test_page_params_offset():
    assert PageParams(page=3, per_page=10).offset == 20


# Colaboradores

def test_create_collaborator_with_linked_user(db_session, collaborator, colaborador_user):
    assert collaborator.full_name == "Ana Silva"
    assert collaborator.admission_date == "2024-01-15T00:00:00.000Z"
    assert collaborator.activities == ["Folha", "Ponto"]
    assert collaborator.user.email == colaborador_user.email

    found = CollaboratorsRepository(db_session).find_by_user_id(colaborador_user.id)
    assert found.id == collaborator.id


def test_list_collaborators_by_name_and_activity(db_session, collaborator):
    repo = CollaboratorsRepository(db_session)
    repo.create(CollaboratorInput(full_name="Bruno Costa", admission_date="2023-06-01T00:00:00.000Z",
                                  activities=["Treinamento"]))
    repo.create(CollaboratorInput(full_name="Carla Souza", admission_date="2022-02-01T00:00:00.000Z",
                                  activities=["Folha"]))

    by_name = repo.list(PageParams(), CollaboratorFilters(name="bruno"))
    assert [c.full_name for c in by_name.data] == ["Bruno Costa"]
    assert by_name.data[0].user is None

    by_activity = repo.list(PageParams(per_page=1), CollaboratorFilters(activity="Folha"))
    assert [c.full_name for c in by_activity.data] == ["Ana Silva"]
    assert by_activity.meta.total == 2
    assert by_activity.meta.total_pages == 2


def test_collaborator_detail(db_session, collaborator, module):
    SkillClaimsRepository(db_session).upsert(_claim(collaborator, module))
    CareerPlansRepository(db_session).create(
        CareerPlanCreate(collaborator_id=collaborator.id, objectives="Especialista em folha")
    )

    detail = CollaboratorsRepository(db_session).find_detail(collaborator.id)
    assert len(detail.skill_claims) == 1
    assert detail.assessments == []
    assert detail.career_plans[0].objectives == "Especialista em folha"
    assert CollaboratorsRepository(db_session).find_detail("inexistente") is None


def test_deleting_user_unlinks_collaborator(db_session, collaborator, colaborador_user):
    assert UsersRepository(db_session).delete(colaborador_user.id)

    found = CollaboratorsRepository(db_session).find_with_user_by_id(collaborator.id)
    assert found.user_id is None
    assert found.user is None


# Autoavaliações e avaliações

def test_skill_claim_upsert_is_idempotent(db_session, collaborator, module):
    repo = SkillClaimsRepository(db_session)
    first = repo.upsert(_claim(collaborator, module))
    second = repo.upsert(_claim(collaborator, module))

    assert first.id == second.id
    assert second.updated_at >= first.updated_at
    assert second.module.code == "FOLHA_CALCULOS"
    assert db_session.query(SkillClaim).count() == 1


def test_one_claim_and_one_assessment_per_pair(db_session, collaborator, module):
    claims = SkillClaimsRepository(db_session)
    assessments = AssessmentsRepository(db_session)
    for level in SkillLevel:
        claims.upsert(_claim(collaborator, module, level=level))
        assessments.upsert(
            AssessmentInput(collaborator_id=collaborator.id, module_id=module.id, target_level=level)
        )

    assert db_session.query(SkillClaim).count() == 1
    assert db_session.query(ManagerAssessment).count() == 1
    assert claims.list(collaborator_id=collaborator.id)[0].current_level == SkillLevel.ESPECIALISTA
    assert assessments.list(collaborator_id=collaborator.id)[0].target_level == SkillLevel.ESPECIALISTA


def test_skill_claim_partial_update(db_session, collaborator, module):
    repo = SkillClaimsRepository(db_session)
    claim = repo.upsert(_claim(collaborator, module))

    updated = repo.update(claim.id, SkillClaimUpdate(current_level=SkillLevel.ESPECIALISTA))
    assert updated.current_level == SkillLevel.ESPECIALISTA
    assert updated.evidence == "Fechamento mensal"

    cleared = repo.update(claim.id, SkillClaimUpdate(evidence=None))
    assert cleared.evidence is None
    assert cleared.current_level == SkillLevel.ESPECIALISTA

    assert repo.update("inexistente", SkillClaimUpdate(evidence="x")) is None


def test_deleting_module_cascades_to_children(db_session, collaborator, module):
    SkillClaimsRepository(db_session).upsert(_claim(collaborator, module))
    AssessmentsRepository(db_session).upsert(
        AssessmentInput(collaborator_id=collaborator.id, module_id=module.id, target_level=SkillLevel.ATENDE)
    )
    CareerPlansRepository(db_session).create(
        CareerPlanCreate(collaborator_id=collaborator.id, objectives="Plano", module_ids=[module.id])
    )

    assert ModulesRepository(db_session).delete(module.id)

    assert db_session.query(SkillClaim).count() == 0
    assert db_session.query(ManagerAssessment).count() == 0
    assert db_session.query(CareerPlanModule).count() == 0


# Planos de carreira

def test_career_plan_create_and_replace_modules(db_session, collaborator, module):
    modules = ModulesRepository(db_session)
    ponto = modules.create(ModuleCreate(code="PONTO", description="Controle de Ponto"))
    ferias = modules.create(ModuleCreate(code="FERIAS", description="Férias"))
    repo = CareerPlansRepository(db_session)

    plan = repo.create(
        CareerPlanCreate(
            collaborator_id=collaborator.id,
            objectives="Dominar a folha",
            due_date="2025-12-31T00:00:00Z",
            module_ids=[ponto.id, module.id],
        )
    )
    assert plan.due_date == "2025-12-31T00:00:00.000Z"
    assert [m.module.code for m in plan.modules] == ["FOLHA_CALCULOS", "PONTO"]

    updated = repo.update(plan.id, CareerPlanUpdate(module_ids=[ferias.id]))
    assert [m.module.code for m in updated.modules] == ["FERIAS"]
    assert updated.objectives == "Dominar a folha"

    untouched = repo.update(plan.id, CareerPlanUpdate(notes="Revisar em junho", due_date=None))
    assert untouched.notes == "Revisar em junho"
    assert untouched.due_date is None
    assert [m.module.code for m in untouched.modules] == ["FERIAS"]


def test_career_plan_create_is_atomic(db_session, collaborator, module):
    repo = CareerPlansRepository(db_session)
    with pytest.raises(IntegrityError):
        repo.create(
            CareerPlanCreate(
                collaborator_id=collaborator.id,
                objectives="Plano inválido",
                module_ids=[module.id, "modulo-inexistente"],
            )
        )

    assert repo.list() == []
    assert db_session.query(CareerPlanModule).count() == 0


def test_career_plan_delete(db_session, collaborator, module):
    repo = CareerPlansRepository(db_session)
    plan = repo.create(
        CareerPlanCreate(collaborator_id=collaborator.id, objectives="Plano", module_ids=[module.id])
    )

    assert repo.delete(plan.id)
    assert repo.find_by_id(plan.id) is None
    assert db_session.query(CareerPlanModule).count() == 0
    assert repo.delete(plan.id) is False


def test_career_plan_update_missing_returns_none(db_session):
    assert CareerPlansRepository(db_session).update("inexistente", CareerPlanUpdate(notes="x")) is None


# Transações

def test_transaction_rolls_back_every_statement(db_session):
    users = UsersRepository(db_session)
    modules = ModulesRepository(db_session)

    with pytest.raises(RuntimeError):
        with transaction(db_session):
            users.create(UserCreate(email="temp@example.com", password_hash="hash"))
            modules.create(ModuleCreate(code="TEMP", description="Temporário"))
            raise RuntimeError("falha")

    assert users.find_by_email("temp@example.com") is None
    assert modules.find_by_code("TEMP") is None
    assert db_session.query(User).count() == 0


def test_nested_transaction_is_rejected(db_session):
    with pytest.raises(RuntimeError):
        with transaction(db_session):
            with transaction(db_session):
                pass


def test_career_plan_module_replacement_keeps_only_new_set(db_session, collaborator):
    modules = ModulesRepository(db_session)
    a, b, c = (modules.create(ModuleCreate(code=code, description=f"Módulo {code}")) for code in ("AA", "BB", "CC"))
    repo = CareerPlansRepository(db_session)
    plan = repo.create(
        CareerPlanCreate(collaborator_id=collaborator.id, objectives="Plano", module_ids=[a.id, b.id])
    )

    updated = repo.update(plan.id, CareerPlanUpdate(module_ids=[b.id, c.id]))

    assert sorted(m.module_id for m in updated.modules) == sorted([b.id, c.id])
    assert db_session.query(CareerPlanModule).count() == 2


def test_module_pagination_arithmetic(db_session):
    repo = ModulesRepository(db_session)
    for i in range(35):
        repo.create(ModuleCreate(code=f"MOD_{i:02d}", description=f"Módulo {i}"))

    page = repo.list(PageParams(page=2, per_page=20))

    assert len(page.data) == 15
    assert page.meta.total == 35
    assert page.meta.total_pages == 2
    assert page.data[0].code == "MOD_20"
