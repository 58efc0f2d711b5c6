"""
Cria as tabelas (se necessário) e garante os dados iniciais.

Usage:
  python scripts/seed.py
"""

from hcm_skills.config import get_settings
from hcm_skills.db import get_engine, get_sessionmaker, init_db
from hcm_skills.services.seed_service import seed_default_data


def main() -> None:
    settings = get_settings()
    init_db(get_engine())

    db = get_sessionmaker()()
    try:
        result = seed_default_data(db, settings)
    finally:
        db.close()

    print("Dados iniciais garantidos.")
    print(f"Administrador: {result['admin_email']} / {result['admin_password']}")


if __name__ == "__main__":
    main()
