"""SQLAlchemy model for the 'skill_claims' table."""

from sqlalchemy import Column, Text, ForeignKey, Index, text
from sqlalchemy.orm import relationship

from hcm_skills.db import Base


class SkillClaim(Base):
    """
    Autoavaliação do colaborador para um módulo.

    No máximo um registro por par (colaborador, módulo).
    """
    __tablename__ = "skill_claims"
    __table_args__ = (
        Index("idx_skill_claims_collaborator_module", "collaboratorId", "moduleId", unique=True),
    )

    id = Column(Text, primary_key=True)
    collaborator_id = Column(
        "collaboratorId",
        Text,
        ForeignKey("collaborator_profiles.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    module_id = Column(
        "moduleId",
        Text,
        ForeignKey("module_routines.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    current_level = Column("currentLevel", Text, nullable=False)
    evidence = Column(Text, nullable=True)
    created_at = Column("createdAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column("updatedAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    # Relacionamentos
    module = relationship("ModuleRoutine")

    def __repr__(self):
        return f"<SkillClaim(collaborator_id='{self.collaborator_id}', module_id='{self.module_id}', current_level='{self.current_level}')>"
