"""SQLAlchemy models for the application."""

from hcm_skills.db import Base

# Import all models here to ensure they are registered with SQLAlchemy
from .enums import Role, SkillLevel
from .user import User
from .collaborator import CollaboratorProfile
from .module_routine import ModuleRoutine
from .skill_claim import SkillClaim
from .manager_assessment import ManagerAssessment
from .career_plan import CareerPlan, CareerPlanModule
from .audit_log import AuditLog
