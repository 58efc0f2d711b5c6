"""SQLAlchemy model for the 'users' table."""

from sqlalchemy import Column, Integer, Text, CheckConstraint, text

from hcm_skills.db import Base


class User(Base):
    """
    Representa os usuários com acesso ao sistema.

    O email é gravado sempre em minúsculas; a senha apenas como hash bcrypt.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('MASTER', 'COLABORADOR')", name="ck_users_role"),
    )

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column("passwordHash", Text, nullable=False)
    role = Column(Text, nullable=False)
    # 0/1, normalizado para bool pelo mapeamento
    must_change_password = Column("mustChangePassword", Integer, nullable=False, server_default=text("0"))
    created_at = Column("createdAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column("updatedAt", Text, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    def __repr__(self):
        return f"<User(email='{self.email}', role='{self.role}')>"
