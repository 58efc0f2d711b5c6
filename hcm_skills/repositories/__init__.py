from .base import BaseRepository
from .users_repository import UsersRepository
from .modules_repository import ModulesRepository
from .collaborators_repository import CollaboratorsRepository
from .skill_claims_repository import SkillClaimsRepository
from .assessments_repository import AssessmentsRepository
from .career_plans_repository import CareerPlansRepository

__all__ = [
    "BaseRepository",
    "UsersRepository",
    "ModulesRepository",
    "CollaboratorsRepository",
    "SkillClaimsRepository",
    "AssessmentsRepository",
    "CareerPlansRepository",
]
