"""SQLAlchemy model for the 'collaborator_profiles' table."""

from sqlalchemy import Column, Text, ForeignKey, text
from sqlalchemy.orm import relationship

from hcm_skills.db import Base


class CollaboratorProfile(Base):
    """
    Representa os colaboradores acompanhados na matriz de competências.

    Pode estar vinculado a no máximo um usuário; ao remover o usuário o vínculo
    é anulado pelo banco (SET NULL).
    """
    __tablename__ = "collaborator_profiles"

    id = Column(Text, primary_key=True)
    user_id = Column(
        "userId",
        Text,
        ForeignKey("users.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
        unique=True,
    )
    full_name = Column("fullName", Text, nullable=False)
    admission_date = Column("admissionDate", Text, nullable=False)
    # Lista de atividades serializada em JSON
    activities = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column("createdAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column("updatedAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    # Relacionamentos
    user = relationship("User")

    def __repr__(self):
        return f"<CollaboratorProfile(id='{self.id}', full_name='{self.full_name}')>"
