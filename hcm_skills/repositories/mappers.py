"""
Conversão entre linhas do banco e entidades de domínio.

As datas são gravadas pelo banco como texto (``CURRENT_TIMESTAMP`` produz
``YYYY-MM-DD HH:MM:SS`` em UTC) e sempre expostas no formato
``YYYY-MM-DDTHH:MM:SS.mmmZ``.
"""

import json
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from hcm_skills.models import (
    CareerPlan,
    CareerPlanModule,
    CollaboratorProfile,
    ManagerAssessment,
    ModuleRoutine,
    SkillClaim,
    User,
)
from hcm_skills.schemas import (
    CareerPlanModuleWithModule,
    CareerPlanSchema,
    CollaboratorProfileSchema,
    CollaboratorWithUser,
    LinkedUser,
    ManagerAssessmentSchema,
    ManagerAssessmentWithModule,
    ModuleRoutineSchema,
    SkillClaimSchema,
    SkillClaimWithModule,
    UserRecord,
    UserSummary,
)


def format_iso(value: datetime) -> str:
    """Formata em ISO-8601 UTC com milissegundos. Datas sem fuso são tratadas como UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _parse(value: str) -> Optional[datetime]:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _to_iso(value: Union[str, datetime, None]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return format_iso(value)

    trimmed = str(value).strip()
    if not trimmed:
        return None

    if trimmed.endswith("Z") or "+" in trimmed:
        parsed = _parse(trimmed)
    else:
        candidate = trimmed if "T" in trimmed else trimmed.replace(" ", "T", 1)
        parsed = _parse(candidate + "Z")
        if parsed is None:
            parsed = _parse(trimmed)

    return format_iso(parsed) if parsed is not None else None


def map_date(value: Union[str, datetime, None]) -> str:
    """Normaliza uma data gravada. Nunca falha: na pior hipótese retorna o instante atual."""
    return _to_iso(value) or format_iso(datetime.now(timezone.utc))


def map_nullable_date(value: Union[str, datetime, None]) -> Optional[str]:
    return _to_iso(value)


def parse_boolean(value: Any) -> bool:
    """Aceita bool, 0/1 ou as strings "1"/"true"; qualquer outra coisa é False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value == "1" or value.lower() == "true"
    return False


def parse_json_array(value: Any) -> List[str]:
    """Lista de strings (aparadas) a partir de uma lista ou de um texto JSON; JSON inválido vira []."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if isinstance(value, list):
        return [entry.strip() for entry in value if isinstance(entry, str)]
    return []


def stringify_json(value: Any) -> Optional[str]:
    """Serializa para JSON; ``None`` continua ``None`` (nunca o texto "null")."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def map_user(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        role=row.role,
        must_change_password=parse_boolean(row.must_change_password),
        created_at=map_date(row.created_at),
        updated_at=map_date(row.updated_at),
    )


def map_user_summary(row: User) -> UserSummary:
    return UserSummary(
        id=row.id,
        email=row.email,
        role=row.role,
        must_change_password=parse_boolean(row.must_change_password),
    )


def map_module(row: ModuleRoutine) -> ModuleRoutineSchema:
    return ModuleRoutineSchema(
        id=row.id,
        code=row.code,
        description=row.description,
        observation=row.observation,
        created_at=map_date(row.created_at),
        updated_at=map_date(row.updated_at),
    )


def map_collaborator(row: CollaboratorProfile) -> CollaboratorProfileSchema:
    return CollaboratorProfileSchema(
        id=row.id,
        user_id=row.user_id,
        full_name=row.full_name,
        admission_date=map_date(row.admission_date),
        activities=parse_json_array(row.activities or "[]"),
        notes=row.notes,
        created_at=map_date(row.created_at),
        updated_at=map_date(row.updated_at),
    )


def map_collaborator_with_user(row: CollaboratorProfile, user: Optional[User]) -> CollaboratorWithUser:
    profile = map_collaborator(row)
    linked = LinkedUser(id=user.id, email=user.email) if user is not None else None
    return CollaboratorWithUser(**profile.model_dump(), user=linked)


def map_skill_claim(row: SkillClaim) -> SkillClaimSchema:
    return SkillClaimSchema(
        id=row.id,
        collaborator_id=row.collaborator_id,
        module_id=row.module_id,
        current_level=row.current_level,
        evidence=row.evidence,
        created_at=map_date(row.created_at),
        updated_at=map_date(row.updated_at),
    )


def map_skill_claim_with_module(row: SkillClaim) -> SkillClaimWithModule:
    return SkillClaimWithModule(**map_skill_claim(row).model_dump(), module=map_module(row.module))


def map_assessment(row: ManagerAssessment) -> ManagerAssessmentSchema:
    return ManagerAssessmentSchema(
        id=row.id,
        collaborator_id=row.collaborator_id,
        module_id=row.module_id,
        target_level=row.target_level,
        comment=row.comment,
        created_at=map_date(row.created_at),
        updated_at=map_date(row.updated_at),
    )


def map_assessment_with_module(row: ManagerAssessment) -> ManagerAssessmentWithModule:
    return ManagerAssessmentWithModule(**map_assessment(row).model_dump(), module=map_module(row.module))


def map_career_plan(row: CareerPlan) -> CareerPlanSchema:
    return CareerPlanSchema(
        id=row.id,
        collaborator_id=row.collaborator_id,
        objectives=row.objectives,
        due_date=map_date(row.due_date) if row.due_date else None,
        notes=row.notes,
        created_at=map_date(row.created_at),
        updated_at=map_date(row.updated_at),
    )


def map_plan_module(row: CareerPlanModule) -> CareerPlanModuleWithModule:
    return CareerPlanModuleWithModule(
        id=row.id,
        career_plan_id=row.career_plan_id,
        module_id=row.module_id,
        created_at=map_date(row.created_at),
        module=map_module(row.module),
    )
