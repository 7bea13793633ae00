"""create_users_table

Revision ID: 4b7d2e91c0a3
Revises:
Create Date: 2026-10-18 09:12:44.512093

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b7d2e91c0a3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users table with its uniqueness and value constraints."""
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('nickname', sa.String(length=20), nullable=False),
        sa.Column('birth_date', sa.String(length=8), nullable=False),
        sa.Column('gender', sa.String(length=1), server_default='N', nullable=False),
        sa.Column('profile_image', sa.String(length=500), nullable=True),
        sa.Column('bio', sa.String(length=100), server_default='', nullable=False),
        sa.Column('is_admin', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("gender IN ('F', 'M', 'N')", name='ck_users_gender'),
        sa.CheckConstraint('length(bio) <= 100', name='ck_users_bio_length'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('nickname', name='uq_users_nickname'),
    )
    op.create_index('ix_users_created_at', 'users', ['created_at'], unique=False)


def downgrade() -> None:
    """Drop the users table."""
    op.drop_index('ix_users_created_at', table_name='users')
    op.drop_table('users')
