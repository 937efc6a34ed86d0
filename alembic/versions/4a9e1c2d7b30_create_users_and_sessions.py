"""Create users, pomodoro_sessions and session_interruptions tables

Revision ID: 4a9e1c2d7b30
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a9e1c2d7b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("preferences", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "pomodoro_sessions",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("task_title", sa.String(), nullable=True),
        sa.Column("task_description", sa.String(), nullable=True),
        sa.Column("task_category", sa.String(), nullable=True),
        sa.Column("productivity", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pomodoro_sessions_user_start", "pomodoro_sessions", ["user_id", "start_time"], unique=False)
    op.create_index("ix_pomodoro_sessions_user_completed", "pomodoro_sessions", ["user_id", "completed"], unique=False)
    op.create_index(op.f("ix_pomodoro_sessions_task_category"), "pomodoro_sessions", ["task_category"], unique=False)

    op.create_table(
        "session_interruptions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("reason", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["session_id"], ["pomodoro_sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_session_interruptions_session_id"), "session_interruptions", ["session_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_session_interruptions_session_id"), table_name="session_interruptions")
    op.drop_table("session_interruptions")
    op.drop_index(op.f("ix_pomodoro_sessions_task_category"), table_name="pomodoro_sessions")
    op.drop_index("ix_pomodoro_sessions_user_completed", table_name="pomodoro_sessions")
    op.drop_index("ix_pomodoro_sessions_user_start", table_name="pomodoro_sessions")
    op.drop_table("pomodoro_sessions")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
