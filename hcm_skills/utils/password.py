import secrets

# Sem caracteres ambíguos (0/O, 1/l/I)
TEMPORARY_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789!@$%"


def generate_temporary_password(length: int = 12) -> str:
    """Gera uma senha temporária com fonte aleatória criptograficamente segura."""
    return "".join(secrets.choice(TEMPORARY_PASSWORD_ALPHABET) for _ in range(length))
