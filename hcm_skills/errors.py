"""Erros de domínio com código fixo, traduzidos para HTTP pela camada de rotas."""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Discriminantes das falhas de domínio."""
    ACCESS_EMAIL_REQUIRED = "ACCESS_EMAIL_REQUIRED"
    ACCESS_EMAIL_IN_USE = "ACCESS_EMAIL_IN_USE"
    COLLABORATOR_ALREADY_LINKED = "COLLABORATOR_ALREADY_LINKED"
    COLLABORATOR_WITHOUT_ACCESS = "COLLABORATOR_WITHOUT_ACCESS"
    COLLABORATOR_PROFILE_REQUIRED = "COLLABORATOR_PROFILE_REQUIRED"
    INVALID_CURRENT_PASSWORD = "INVALID_CURRENT_PASSWORD"
    PASSWORD_UNCHANGED = "PASSWORD_UNCHANGED"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class DomainError(Exception):
    """
    Erro base do domínio.

    ``str(error)`` é o próprio código (ex.: "ACCESS_EMAIL_IN_USE"), de modo que
    quem compara a mensagem continua funcionando; ``error.code`` permite
    ramificar sem interpretar texto.
    """

    def __init__(self, code: ErrorCode, detail: Optional[str] = None):
        super().__init__(code.value)
        self.code = code
        self.detail = detail


class ValidationError(DomainError):
    """Entrada inválida detectada antes de qualquer escrita."""


class ConflictError(DomainError):
    """Violação de unicidade detectada pelo domínio."""


class PersistenceError(DomainError):
    """Escrita aceita pelo banco mas ausente na releitura."""

    def __init__(self, detail: str):
        super().__init__(ErrorCode.PERSISTENCE_FAILURE, detail)
