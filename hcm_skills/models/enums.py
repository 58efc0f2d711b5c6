"""Enumerações persistidas literalmente no banco e expostas na API."""

from enum import Enum


class Role(str, Enum):
    """Papéis de acesso."""
    MASTER = "MASTER"
    COLABORADOR = "COLABORADOR"


class SkillLevel(str, Enum):
    """Níveis de proficiência, do menor para o maior."""
    NAO_ATENDE = "NAO_ATENDE"
    ATENDE = "ATENDE"
    IMPLANTA_SOZINHO = "IMPLANTA_SOZINHO"
    ESPECIALISTA = "ESPECIALISTA"
