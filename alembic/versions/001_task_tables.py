"""Create tasks, subtasks and comments tables

Revision ID: 001_task_tables
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_task_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


STATUS_VALUES = ("PENDING", "IN_PROGRESS", "COMPLETED")


def upgrade() -> None:
    """
    Creates:
    1. tasks - status lifecycle, creator/assignee user ids, due date, team/project labels
    2. subtasks - children of a task (FK, cascade on delete)
    3. comments - attached to a task or subtask through (owner_kind, owner_id)
    """
    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column(
            'status',
            sa.Enum(*STATUS_VALUES, name='task_status', native_enum=False, length=20),
            nullable=False,
            server_default='PENDING',
        ),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('assigned_to', sa.Integer(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('team', sa.String(length=100), nullable=True),
        sa.Column('project', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_tasks_status', 'tasks', ['status'])
    op.create_index('ix_tasks_assigned_to', 'tasks', ['assigned_to'])

    op.create_table(
        'subtasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('task_id', sa.Integer(), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column(
            'status',
            sa.Enum(*STATUS_VALUES, name='task_status', native_enum=False, length=20),
            nullable=False,
            server_default='PENDING',
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_subtasks_task_id', 'subtasks', ['task_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'owner_kind',
            sa.Enum('TASK', 'SUBTASK', name='comment_owner_kind', native_enum=False, length=10),
            nullable=False,
        ),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("owner_kind IN ('TASK', 'SUBTASK')", name='ck_comments_owner_kind'),
        sa.CheckConstraint('length(text) > 0', name='ck_comments_text_not_empty'),
    )
    op.create_index('ix_comments_owner', 'comments', ['owner_kind', 'owner_id'])


def downgrade() -> None:
    op.drop_index('ix_comments_owner', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_subtasks_task_id', table_name='subtasks')
    op.drop_table('subtasks')
    op.drop_index('ix_tasks_assigned_to', table_name='tasks')
    op.drop_index('ix_tasks_status', table_name='tasks')
    op.drop_table('tasks')
