from hcm_skills.models.enums import SkillLevel
from hcm_skills.repositories import AssessmentsRepository, CollaboratorsRepository, ModulesRepository, SkillClaimsRepository
from hcm_skills.schemas import (
    AssessmentInput,
    CollaboratorInput,
    CoverageEntry,
    ManagerAssessmentSchema,
    ModuleCreate,
    ModuleRoutineSchema,
    SkillClaimInput,
    SkillClaimSchema,
)
from hcm_skills.services import ReportingService
from hcm_skills.services.reporting_service import (
    build_coverage,
    round_half_up,
    build_kpis,
    build_trends,
    render_coverage_csv,
)
from hcm_skills.utils.skill_level import compute_gap, skill_level_score

TIMESTAMP = "2024-01-15T10:00:00.000Z"


def _module(module_id, code):
    return ModuleRoutineSchema(
        id=module_id, code=code, description=f"Módulo {code}", created_at=TIMESTAMP, updated_at=TIMESTAMP
    )


def _claim(collaborator_id, module_id, level):
    return SkillClaimSchema(
        id=f"c-{collaborator_id}-{module_id}",
        collaborator_id=collaborator_id,
        module_id=module_id,
        current_level=level,
        created_at=TIMESTAMP,
        updated_at=TIMESTAMP,
    )


def _assessment(collaborator_id, module_id, level):
    return ManagerAssessmentSchema(
        id=f"a-{collaborator_id}-{module_id}",
        collaborator_id=collaborator_id,
        module_id=module_id,
        target_level=level,
        created_at=TIMESTAMP,
        updated_at=TIMESTAMP,
    )


def test_skill_level_scores():
    assert [skill_level_score(level) for level in SkillLevel] == [0, 1, 2, 3]


def test_compute_gap():
    assert compute_gap(SkillLevel.ESPECIALISTA, SkillLevel.NAO_ATENDE) == 3
    assert compute_gap(SkillLevel.ATENDE, SkillLevel.ESPECIALISTA) == -2
    assert compute_gap(None, SkillLevel.ATENDE) is None
    assert compute_gap(SkillLevel.ATENDE, None) is None


def test_build_kpis_averages_only_complete_pairs():
    claims = [
        _claim("c1", "m1", SkillLevel.NAO_ATENDE),
        _claim("c1", "m2", SkillLevel.ATENDE),
        _claim("c2", "m1", SkillLevel.IMPLANTA_SOZINHO),
    ]
    assessments = [
        _assessment("c1", "m1", SkillLevel.ESPECIALISTA),  # 3
        _assessment("c2", "m1", SkillLevel.ATENDE),  # -1
        _assessment("c2", "m2", SkillLevel.ESPECIALISTA),  # sem autoavaliação
    ]

    kpis = build_kpis(2, 2, claims, assessments)

    assert kpis.total_collaborators == 2
    assert kpis.total_modules == 2
    assert kpis.total_claims == 3
    assert kpis.total_assessments == 3
    assert kpis.average_gap == 1


def test_build_kpis_without_pairs():
    assert build_kpis(0, 0, [], []).average_gap == 0


def test_round_half_up_rounds_ties_away_from_zero():
    assert round_half_up(0.125) == 0.13
    assert round_half_up(0.375) == 0.38
    assert round_half_up(-0.125) == -0.13
    assert round_half_up(2.5) == 2.5


def test_build_kpis_average_gap_over_eight_pairs():
    claims = [_claim(f"c{i}", "m1", SkillLevel.ATENDE) for i in range(8)]
    assessments = [_assessment(f"c{i}", "m1", SkillLevel.ATENDE) for i in range(7)]
    assessments.append(_assessment("c7", "m1", SkillLevel.IMPLANTA_SOZINHO))

    assert build_kpis(8, 1, claims, assessments).average_gap == 0.13


def test_build_trends_module_gap_over_eight_claims():
    claims = [_claim(f"c{i}", "m1", SkillLevel.ATENDE) for i in range(7)]
    claims.append(_claim("c7", "m1", SkillLevel.NAO_ATENDE))
    assessments = [_assessment("c0", "m1", SkillLevel.ATENDE)]

    trends = build_trends([_module("m1", "A")], claims, assessments)

    assert trends.gap_by_module[0].gap == 0.13
    assert trends.top_gaps[0].gap == 0.13


def test_build_trends():
    modules = [_module("m1", "A"), _module("m2", "B"), _module("m3", "C")]
    claims = [
        _claim("c1", "m1", SkillLevel.NAO_ATENDE),
        _claim("c2", "m1", SkillLevel.ATENDE),
        _claim("c1", "m2", SkillLevel.ESPECIALISTA),
    ]
    assessments = [
        _assessment("c1", "m1", SkillLevel.ESPECIALISTA),
        _assessment("c1", "m2", SkillLevel.ATENDE),
        _assessment("c1", "m3", SkillLevel.ATENDE),
    ]

    trends = build_trends(modules, claims, assessments)

    assert [(item.level, item.count) for item in trends.level_distribution] == [
        (SkillLevel.NAO_ATENDE, 1),
        (SkillLevel.ATENDE, 1),
        (SkillLevel.IMPLANTA_SOZINHO, 0),
        (SkillLevel.ESPECIALISTA, 1),
    ]
    assert [item.gap for item in trends.gap_by_module] == [2.5, -2, None]
    assert [item.module_code for item in trends.top_gaps] == ["A", "B"]


def test_build_trends_keeps_module_order_on_ties_and_limits_top():
    modules = [_module(f"m{i}", f"M{i}") for i in range(7)]
    claims = [_claim("c1", f"m{i}", SkillLevel.NAO_ATENDE) for i in range(7)]
    assessments = [_assessment("c1", f"m{i}", SkillLevel.ATENDE) for i in range(7)]
    assessments[6] = _assessment("c1", "m6", SkillLevel.ESPECIALISTA)

    trends = build_trends(modules, claims, assessments)

    assert [item.module_code for item in trends.top_gaps] == ["M6", "M0", "M1", "M2", "M3"]


def test_build_coverage_has_one_row_per_module():
    modules = [_module("m1", "A"), _module("m2", "B")]
    entries = build_coverage(
        "c1",
        "Ana Silva",
        modules,
        [_claim("c1", "m1", SkillLevel.ATENDE)],
        [_assessment("c1", "m1", SkillLevel.ESPECIALISTA)],
    )

    assert [entry.gap for entry in entries] == [2, None]
    assert entries[1].current_level is None
    assert entries[1].target_level is None


def _entry(**overrides):
    data = dict(
        collaborator_id="c1",
        collaborator_name="Ana Silva",
        module_id="m1",
        module_code="FOLHA_CALCULOS",
        module_description="Folha de Pagamento",
        current_level=SkillLevel.ATENDE,
        target_level=SkillLevel.ESPECIALISTA,
        gap=2,
    )
    data.update(overrides)
    return CoverageEntry(**data)


def test_render_coverage_csv():
    csv = render_coverage_csv([_entry()])

    assert csv.split("\n") == [
        "colaborador,module_code,module_description,current_level,target_level,gap",
        '"Ana Silva","FOLHA_CALCULOS","Folha de Pagamento",ATENDE,ESPECIALISTA,2',
    ]


def test_render_coverage_csv_escapes_quotes_and_blanks():
    csv = render_coverage_csv(
        [_entry(module_description='Folha "nova"', current_level=None, target_level=None, gap=None)]
    )

    assert csv.split("\n")[1] == '"Ana Silva","FOLHA_CALCULOS","Folha ""nova""",,,'
    assert not csv.endswith("\n")


def test_reporting_service_reads_from_store(db_session):
    modules = ModulesRepository(db_session)
    folha = modules.create(ModuleCreate(code="FOLHA", description="Folha de Pagamento"))
    modules.create(ModuleCreate(code="PONTO", description="Controle de Ponto"))
    ana = CollaboratorsRepository(db_session).create(
        CollaboratorInput(full_name="Ana Silva", admission_date=TIMESTAMP)
    )
    SkillClaimsRepository(db_session).upsert(
        SkillClaimInput(collaborator_id=ana.id, module_id=folha.id, current_level=SkillLevel.ATENDE)
    )
    AssessmentsRepository(db_session).upsert(
        AssessmentInput(collaborator_id=ana.id, module_id=folha.id, target_level=SkillLevel.ESPECIALISTA)
    )

    service = ReportingService(db_session)

    kpis = service.kpis()
    assert kpis.total_collaborators == 1
    assert kpis.total_modules == 2
    assert kpis.average_gap == 2

    trends = service.trends()
    assert [item.module_code for item in trends.top_gaps] == ["FOLHA"]

    coverage = service.coverage(ana.id)
    assert [(entry.module_code, entry.gap) for entry in coverage] == [("FOLHA", 2), ("PONTO", None)]
    assert service.coverage("inexistente") is None
