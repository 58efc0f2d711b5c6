"""SQLAlchemy model for the 'audit_logs' table."""

from sqlalchemy import Column, Text, ForeignKey, text

from hcm_skills.db import Base


class AuditLog(Base):
    """Registro de auditoria. A tabela existe no esquema, mas ainda não é alimentada."""
    __tablename__ = "audit_logs"

    id = Column(Text, primary_key=True)
    user_id = Column(
        "userId",
        Text,
        ForeignKey("users.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    action = Column(Text, nullable=False)
    entity = Column(Text, nullable=False)
    entity_id = Column("entityId", Text, nullable=True)
    payload = Column(Text, nullable=True)
    created_at = Column("createdAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    def __repr__(self):
        return f"<AuditLog(action='{self.action}', entity='{self.entity}')>"
