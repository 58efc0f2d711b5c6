"""SQLAlchemy models for the 'career_plans' and 'career_plan_modules' tables."""

from sqlalchemy import Column, Text, ForeignKey, Index, text
from sqlalchemy.orm import relationship

from hcm_skills.db import Base


class CareerPlan(Base):
    """Plano de carreira elaborado pelo gestor para um colaborador."""
    __tablename__ = "career_plans"

    id = Column(Text, primary_key=True)
    collaborator_id = Column(
        "collaboratorId",
        Text,
        ForeignKey("collaborator_profiles.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    objectives = Column(Text, nullable=False)
    due_date = Column("dueDate", Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column("createdAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column("updatedAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    def __repr__(self):
        return f"<CareerPlan(id='{self.id}', collaborator_id='{self.collaborator_id}')>"


class CareerPlanModule(Base):
    """
    Associação entre plano de carreira e módulo.

    Um módulo aparece no máximo uma vez por plano.
    """
    __tablename__ = "career_plan_modules"
    __table_args__ = (
        Index("idx_career_plan_modules_plan_module", "careerPlanId", "moduleId", unique=True),
    )

    id = Column(Text, primary_key=True)
    career_plan_id = Column(
        "careerPlanId",
        Text,
        ForeignKey("career_plans.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    module_id = Column(
        "moduleId",
        Text,
        ForeignKey("module_routines.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    created_at = Column("createdAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    # Relacionamentos
    module = relationship("ModuleRoutine")

    def __repr__(self):
        return f"<CareerPlanModule(career_plan_id='{self.career_plan_id}', module_id='{self.module_id}')>"
