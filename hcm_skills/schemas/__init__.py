from .base import BaseSchema, PageParams, PageMeta, Paginated
from .users import (
    UserRecord, UserSummary, UserCreate, UserUpdate,
    LoginRequest, LoginResponse, ChangePasswordRequest,
)
from .modules import ModuleRoutineSchema, ModuleCreate, ModuleUpdate, ModuleFilters
from .skills import (
    SkillClaimSchema, SkillClaimWithModule, SkillClaimInput, SkillClaimPayload, SkillClaimUpdate,
)
from .assessments import ManagerAssessmentSchema, ManagerAssessmentWithModule, AssessmentInput
from .career_plans import (
    CareerPlanSchema, CareerPlanModuleSchema, CareerPlanModuleWithModule,
    CareerPlanWithModules, CareerPlanCreate, CareerPlanUpdate,
)
from .collaborators import (
    LinkedUser, CollaboratorProfileSchema, CollaboratorWithUser, CollaboratorDetail,
    CollaboratorInput, CollaboratorPayload, CollaboratorFilters, AccessCredentials,
    CollaboratorWriteResponse, ResetAccessResponse,
)
from .reports import DashboardKpis, LevelCount, ModuleGap, DashboardTrends, CoverageEntry
