"""Tradução dos erros de domínio para respostas HTTP."""

from typing import Dict, Tuple

from fastapi import HTTPException, status

from hcm_skills.errors import DomainError, ErrorCode

DOMAIN_ERROR_RESPONSES: Dict[ErrorCode, Tuple[int, str]] = {
    ErrorCode.ACCESS_EMAIL_REQUIRED: (status.HTTP_400_BAD_REQUEST, "Informe o e-mail para criar o acesso."),
    ErrorCode.ACCESS_EMAIL_IN_USE: (status.HTTP_409_CONFLICT, "Já existe um usuário cadastrado com este e-mail."),
    ErrorCode.COLLABORATOR_ALREADY_LINKED: (
        status.HTTP_400_BAD_REQUEST,
        "O colaborador já possui um usuário vinculado.",
    ),
    ErrorCode.COLLABORATOR_WITHOUT_ACCESS: (
        status.HTTP_400_BAD_REQUEST,
        "Este colaborador ainda não possui usuário vinculado.",
    ),
    ErrorCode.COLLABORATOR_PROFILE_REQUIRED: (
        status.HTTP_400_BAD_REQUEST,
        "Perfil de colaborador nao encontrado para este usuario.",
    ),
    ErrorCode.INVALID_CURRENT_PASSWORD: (status.HTTP_400_BAD_REQUEST, "Senha atual incorreta."),
    ErrorCode.PASSWORD_UNCHANGED: (status.HTTP_400_BAD_REQUEST, "Utilize uma senha diferente da atual."),
}


def to_http_exception(error: DomainError) -> HTTPException:
    """HTTPException correspondente ao código do erro; códigos sem mapeamento viram 500."""
    status_code, detail = DOMAIN_ERROR_RESPONSES.get(
        error.code,
        (status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro interno do servidor."),
    )
    return HTTPException(status_code=status_code, detail=detail)
