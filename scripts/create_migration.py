"""
Script para gerar uma nova revisão do Alembic a partir dos modelos.

Usa a URL de DATABASE_URL (.env) e compara o banco com o metadata dos
modelos (autogenerate).

Usage:
  python scripts/create_migration.py "mensagem da revisão"
"""

import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

from hcm_skills.config import get_settings
from hcm_skills.db import mask_database_url

root_dir = Path(__file__).resolve().parent.parent


def create_migration(message: str) -> None:
    """Cria uma revisão autogerada do Alembic."""
    settings = get_settings()

    alembic_cfg = Config(str(root_dir / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(root_dir / "alembic"))

    # Escapar o caractere % duplicando-o para evitar erro de interpolação
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))

    print(f"Criando migração usando URL: {mask_database_url(settings.database_url)}")

    try:
        command.revision(alembic_cfg, message=message, autogenerate=True)
        print("Migração criada com sucesso!")
    except Exception as e:
        print(f"Erro ao criar migração: {e}")
        sys.exit(1)


if __name__ == "__main__":
    create_migration(sys.argv[1] if len(sys.argv) > 1 else "schema update")
