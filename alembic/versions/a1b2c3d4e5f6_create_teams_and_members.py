"""create_teams_and_members

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 10:00:00.000000

팀/회원 테이블 생성: teams, members.
Add teams and members tables for the member search layer.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # teams: 팀 (Teams referenced by members)
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
    )

    # members: 회원 (username nullable, team optional)
    # Members; team_id is SET NULL when the team is deleted
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(255), nullable=True),
        sa.Column('age', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('teams.id', ondelete='SET NULL'), nullable=True),
    )

    # 검색 조건 인덱스: Indexes for username filter and team join
    op.create_index('ix_members_username', 'members', ['username'])
    op.create_index('ix_members_team_id', 'members', ['team_id'])


def downgrade() -> None:
    # members 테이블 삭제 (인덱스는 테이블과 함께 삭제됨)
    # Drop members table (indexes are dropped with the table)
    op.drop_table('members')

    # teams 테이블 삭제: Drop teams table
    op.drop_table('teams')
