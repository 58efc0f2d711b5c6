"""Ordem total dos níveis de proficiência e sua pontuação."""

from typing import Dict, List, Optional

from hcm_skills.models.enums import SkillLevel

SKILL_LEVEL_ORDER: List[SkillLevel] = [
    SkillLevel.NAO_ATENDE,
    SkillLevel.ATENDE,
    SkillLevel.IMPLANTA_SOZINHO,
    SkillLevel.ESPECIALISTA,
]

SKILL_LEVEL_SCORE: Dict[SkillLevel, int] = {
    level: score for score, level in enumerate(SKILL_LEVEL_ORDER)
}


def skill_level_score(level: SkillLevel) -> int:
    return SKILL_LEVEL_SCORE[SkillLevel(level)]


def compute_gap(target: Optional[SkillLevel], current: Optional[SkillLevel]) -> Optional[int]:
    """
    Diferença entre a pontuação do nível-alvo e a do nível atual.

    Positiva quando o colaborador está abaixo do alvo, negativa quando está
    acima. ``None`` se algum dos lados não existir.
    """
    if target is None or current is None:
        return None
    return skill_level_score(target) - skill_level_score(current)
