"""
Indicadores do painel e relatório de cobertura.

As funções ``build_*`` são puras e recebem as entidades já carregadas;
``ReportingService`` apenas busca os dados pelos repositórios.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from hcm_skills.repositories import (
    AssessmentsRepository,
    CollaboratorsRepository,
    ModulesRepository,
    SkillClaimsRepository,
)
from hcm_skills.schemas import (
    CoverageEntry,
    DashboardKpis,
    DashboardTrends,
    LevelCount,
    ManagerAssessmentSchema,
    ModuleGap,
    ModuleRoutineSchema,
    SkillClaimSchema,
)
from hcm_skills.utils.skill_level import SKILL_LEVEL_ORDER, compute_gap, skill_level_score

CSV_HEADER = ["colaborador", "module_code", "module_description", "current_level", "target_level", "gap"]

PairKey = Tuple[str, str]


def _average(values: Sequence[int]) -> float:
    return sum(values) / len(values)


def round_half_up(value: float) -> float:
    """Arredonda para 2 casas com empates para cima (1.125 vira 1.13, -1.125 vira -1.13)."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def build_kpis(
    total_collaborators: int,
    total_modules: int,
    claims: Sequence[SkillClaimSchema],
    assessments: Sequence[ManagerAssessmentSchema],
) -> DashboardKpis:
    """
    Contagens gerais e o gap médio.

    O gap médio considera apenas os pares (colaborador, módulo) que têm
    autoavaliação e avaliação; sem pares, vale 0.
    """
    current_by_pair: Dict[PairKey, str] = {
        (claim.collaborator_id, claim.module_id): claim.current_level for claim in claims
    }

    gaps = []
    for assessment in assessments:
        current = current_by_pair.get((assessment.collaborator_id, assessment.module_id))
        gap = compute_gap(assessment.target_level, current)
        if gap is not None:
            gaps.append(gap)

    return DashboardKpis(
        total_collaborators=total_collaborators,
        total_modules=total_modules,
        total_claims=len(claims),
        total_assessments=len(assessments),
        average_gap=round_half_up(_average(gaps)) if gaps else 0,
    )


def build_trends(
    modules: Sequence[ModuleRoutineSchema],
    claims: Sequence[SkillClaimSchema],
    assessments: Sequence[ManagerAssessmentSchema],
    top: int = 5,
) -> DashboardTrends:
    """
    Distribuição de níveis, gap por módulo e os maiores gaps.

    O gap de um módulo é a média das pontuações-alvo menos a média das
    pontuações atuais; ``None`` se faltar qualquer um dos lados. Empates no
    ranking mantêm a ordem dos módulos.
    """
    level_distribution = [
        LevelCount(level=level, count=sum(1 for claim in claims if claim.current_level == level))
        for level in SKILL_LEVEL_ORDER
    ]

    gap_by_module = []
    for module in modules:
        current_scores = [skill_level_score(c.current_level) for c in claims if c.module_id == module.id]
        target_scores = [skill_level_score(a.target_level) for a in assessments if a.module_id == module.id]

        gap = None
        if current_scores and target_scores:
            gap = round_half_up(_average(target_scores) - _average(current_scores))

        gap_by_module.append(
            ModuleGap(
                module_id=module.id,
                module_code=module.code,
                module_description=module.description,
                gap=gap,
            )
        )

    ranked = sorted((item for item in gap_by_module if item.gap is not None), key=lambda item: item.gap, reverse=True)

    return DashboardTrends(
        level_distribution=level_distribution,
        gap_by_module=gap_by_module,
        top_gaps=ranked[:top],
    )


def build_coverage(
    collaborator_id: str,
    collaborator_name: str,
    modules: Sequence[ModuleRoutineSchema],
    claims: Sequence[SkillClaimSchema],
    assessments: Sequence[ManagerAssessmentSchema],
) -> List[CoverageEntry]:
    """Uma linha por módulo cadastrado, com os níveis do colaborador (quando houver) e o gap."""
    current_by_module = {claim.module_id: claim.current_level for claim in claims}
    target_by_module = {assessment.module_id: assessment.target_level for assessment in assessments}

    entries = []
    for module in modules:
        current = current_by_module.get(module.id)
        target = target_by_module.get(module.id)
        entries.append(
            CoverageEntry(
                collaborator_id=collaborator_id,
                collaborator_name=collaborator_name,
                module_id=module.id,
                module_code=module.code,
                module_description=module.description,
                current_level=current,
                target_level=target,
                gap=compute_gap(target, current),
            )
        )
    return entries


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def render_coverage_csv(entries: Sequence[CoverageEntry]) -> str:
    """
    CSV do relatório de cobertura.

    Campos de texto entre aspas duplas; níveis e gap ausentes ficam vazios.
    Linhas separadas por ``\\n``, sem quebra no final.
    """
    lines = [",".join(CSV_HEADER)]
    for entry in entries:
        lines.append(
            ",".join(
                [
                    _quote(entry.collaborator_name),
                    _quote(entry.module_code),
                    _quote(entry.module_description),
                    entry.current_level.value if entry.current_level else "",
                    entry.target_level.value if entry.target_level else "",
                    "" if entry.gap is None else str(entry.gap),
                ]
            )
        )
    return "\n".join(lines)


class ReportingService:
    """Carrega os dados pelos repositórios e monta os indicadores."""

    def __init__(self, db: Session):
        self.db = db
        self.modules = ModulesRepository(db)
        self.collaborators = CollaboratorsRepository(db)
        self.claims = SkillClaimsRepository(db)
        self.assessments = AssessmentsRepository(db)

    def kpis(self) -> DashboardKpis:
        return build_kpis(
            total_collaborators=self.collaborators.count(),
            total_modules=self.modules.count(),
            claims=self.claims.list(),
            assessments=self.assessments.list_all(),
        )

    def trends(self) -> DashboardTrends:
        return build_trends(
            modules=self.modules.list_all(),
            claims=self.claims.list(),
            assessments=self.assessments.list_all(),
        )

    def coverage(self, collaborator_id: str) -> Optional[List[CoverageEntry]]:
        """
        Relatório de cobertura de um colaborador.

        Returns:
            Linhas do relatório, ou None se o colaborador não existir
        """
        collaborator = self.collaborators.find_with_user_by_id(collaborator_id)
        if collaborator is None:
            return None

        return build_coverage(
            collaborator_id=collaborator.id,
            collaborator_name=collaborator.full_name,
            modules=self.modules.list_all(),
            claims=self.claims.list(collaborator_id=collaborator_id),
            assessments=self.assessments.list(collaborator_id=collaborator_id),
        )
