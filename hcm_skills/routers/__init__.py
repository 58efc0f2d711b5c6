from .auth import router as auth_router
from .users import router as users_router
from .collaborators import router as collaborators_router
from .modules import router as modules_router
from .skills import router as skills_router
from .assessments import router as assessments_router
from .dashboard import router as dashboard_router
from .reports import router as reports_router

__all__ = [
    "auth_router",
    "users_router",
    "collaborators_router",
    "modules_router",
    "skills_router",
    "assessments_router",
    "dashboard_router",
    "reports_router",
]
