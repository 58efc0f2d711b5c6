"""SQLAlchemy model for the 'module_routines' table."""

from sqlalchemy import Column, Text, text

from hcm_skills.db import Base


class ModuleRoutine(Base):
    """
    Representa os módulos/rotinas avaliados na matriz.

    O código é único e gravado em maiúsculas. ``observation`` também funciona
    como categoria nos relatórios.
    """
    __tablename__ = "module_routines"

    id = Column(Text, primary_key=True)
    code = Column(Text, nullable=False, unique=True)
    description = Column(Text, nullable=False)
    observation = Column(Text, nullable=True)
    created_at = Column("createdAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column("updatedAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    def __repr__(self):
        return f"<ModuleRoutine(code='{self.code}')>"
