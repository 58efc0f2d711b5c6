from .auth_service import AuthService
from .collaborator_access import CollaboratorAccessService
from .reporting_service import ReportingService

__all__ = ["AuthService", "CollaboratorAccessService", "ReportingService"]
