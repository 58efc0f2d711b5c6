"""initial schema: users, collaborators, modules, claims, assessments, career plans, audit logs

Revision ID: 20260301_01
Revises:
Create Date: 2026-03-01
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20260301_01'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(with_updated: bool = True):
    columns = [sa.Column('createdAt', sa.Text(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP'))]
    if with_updated:
        columns.append(sa.Column('updatedAt', sa.Text(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')))
    return columns


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Text(), primary_key=True, nullable=False),
        sa.Column('email', sa.Text(), nullable=False, unique=True),
        sa.Column('passwordHash', sa.Text(), nullable=False),
        sa.Column('role', sa.Text(), nullable=False),
        sa.Column('mustChangePassword', sa.Integer(), nullable=False, server_default=sa.text('0')),
        *_timestamps(),
        sa.CheckConstraint("role IN ('MASTER', 'COLABORADOR')", name='ck_users_role'),
    )

    op.create_table(
        'collaborator_profiles',
        sa.Column('id', sa.Text(), primary_key=True, nullable=False),
        sa.Column(
            'userId',
            sa.Text(),
            sa.ForeignKey('users.id', ondelete='SET NULL', onupdate='CASCADE'),
            nullable=True,
            unique=True,
        ),
        sa.Column('fullName', sa.Text(), nullable=False),
        sa.Column('admissionDate', sa.Text(), nullable=False),
        sa.Column('activities', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'module_routines',
        sa.Column('id', sa.Text(), primary_key=True, nullable=False),
        sa.Column('code', sa.Text(), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('observation', sa.Text(), nullable=True),
        *_timestamps(),
    )

    # Autoavaliação e avaliação do gestor: um registro por (colaborador, módulo)
    for table, level_column, text_column in (
        ('skill_claims', 'currentLevel', 'evidence'),
        ('manager_assessments', 'targetLevel', 'comment'),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.Text(), primary_key=True, nullable=False),
            sa.Column(
                'collaboratorId',
                sa.Text(),
                sa.ForeignKey('collaborator_profiles.id', ondelete='CASCADE', onupdate='CASCADE'),
                nullable=False,
            ),
            sa.Column(
                'moduleId',
                sa.Text(),
                sa.ForeignKey('module_routines.id', ondelete='CASCADE', onupdate='CASCADE'),
                nullable=False,
            ),
            sa.Column(level_column, sa.Text(), nullable=False),
            sa.Column(text_column, sa.Text(), nullable=True),
            *_timestamps(),
        )
        op.create_index(f'idx_{table}_collaborator_module', table, ['collaboratorId', 'moduleId'], unique=True)

    op.create_table(
        'career_plans',
        sa.Column('id', sa.Text(), primary_key=True, nullable=False),
        sa.Column(
            'collaboratorId',
            sa.Text(),
            sa.ForeignKey('collaborator_profiles.id', ondelete='CASCADE', onupdate='CASCADE'),
            nullable=False,
        ),
        sa.Column('objectives', sa.Text(), nullable=False),
        sa.Column('dueDate', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'career_plan_modules',
        sa.Column('id', sa.Text(), primary_key=True, nullable=False),
        sa.Column(
            'careerPlanId',
            sa.Text(),
            sa.ForeignKey('career_plans.id', ondelete='CASCADE', onupdate='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'moduleId',
            sa.Text(),
            sa.ForeignKey('module_routines.id', ondelete='CASCADE', onupdate='CASCADE'),
            nullable=False,
        ),
        *_timestamps(with_updated=False),
    )
    op.create_index(
        'idx_career_plan_modules_plan_module', 'career_plan_modules', ['careerPlanId', 'moduleId'], unique=True
    )

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Text(), primary_key=True, nullable=False),
        sa.Column(
            'userId',
            sa.Text(),
            sa.ForeignKey('users.id', ondelete='SET NULL', onupdate='CASCADE'),
            nullable=True,
        ),
        sa.Column('action', sa.Text(), nullable=False),
        sa.Column('entity', sa.Text(), nullable=False),
        sa.Column('entityId', sa.Text(), nullable=True),
        sa.Column('payload', sa.Text(), nullable=True),
        *_timestamps(with_updated=False),
    )


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_index('idx_career_plan_modules_plan_module', table_name='career_plan_modules')
    op.drop_table('career_plan_modules')
    op.drop_table('career_plans')
    for table in ('manager_assessments', 'skill_claims'):
        op.drop_index(f'idx_{table}_collaborator_module', table_name=table)
        op.drop_table(table)
    op.drop_table('module_routines')
    op.drop_table('collaborator_profiles')
    op.drop_table('users')
